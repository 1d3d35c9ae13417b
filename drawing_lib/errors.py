"""Error types raised by the drawing store and its blob backends.

Every error carries an optional `operation` and `subject` (a drawing id or
a backend key). `wrap` returns a new error of the same class with fresh
context so callers can add detail without changing the kind of failure.
"""
from __future__ import annotations
from typing import Optional


class DrawingStoreError(Exception):
    def __init__(self, message: str, *, operation: Optional[str] = None, subject: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.subject = subject

    def __str__(self) -> str:
        if self.operation and self.subject is not None:
            return f"{self.operation} {self.subject!r}: {self.message}"
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message

    def wrap(self, operation: str, subject: Optional[str] = None) -> "DrawingStoreError":
        """Return a same-class error that prefixes this one with context."""
        return type(self)(str(self), operation=operation, subject=subject)


class InputReadError(DrawingStoreError):
    """The content stream handed to a put could not be drained."""


class BackendError(DrawingStoreError):
    """Any failure reported by the blob backend."""


class BlobNotFoundError(BackendError):
    """No blob is stored under the requested key."""


class RepositoryInitError(BackendError):
    """The backend repository could not be created or opened."""


class ContentFormatError(DrawingStoreError):
    """Stored content is not a JSON object."""


class SchemaError(DrawingStoreError):
    reason = "invalid"


class MissingTitleError(SchemaError):
    reason = "missing"


class TitleTypeError(SchemaError):
    reason = "wrong_type"
