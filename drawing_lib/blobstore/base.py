"""Blob backend interface definitions.

Defines the BlobStore abstract class the drawing store talks to. A blob
store keeps raw bytes under string keys, records every mutation together
with the actor responsible for it and reports missing keys as errors rather
than empty results.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional


@dataclass(frozen=True)
class BlobInfo:
    """Unit of mutation handed to `BlobStore.add_blob`."""
    key: str
    content: bytes
    modified_by: str


@dataclass(frozen=True)
class Commit:
    """One attributed change recorded by a blob store."""
    sequence: int
    action: str
    key: str
    actor: str
    timestamp: str
    digest: Optional[str] = None
    source_key: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "action": self.action,
            "key": self.key,
            "actor": self.actor,
            "timestamp": self.timestamp,
            "digest": self.digest,
            "source_key": self.source_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Commit":
        return cls(
            sequence=int(data["sequence"]),
            action=data["action"],
            key=data["key"],
            actor=data["actor"],
            timestamp=data["timestamp"],
            digest=data.get("digest"),
            source_key=data.get("source_key"),
        )


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class BlobStore(ABC):
    """Abstract version-recording blob store.

    Implementations must be thread-safe; the drawing store adds no locking.
    """

    @abstractmethod
    def create_repository(self) -> None:
        """Create the repository if it does not exist yet.

        Must be idempotent. Raise `RepositoryInitError` on failure.
        """

    @abstractmethod
    def add_blob(self, blob: BlobInfo) -> None:
        """Create or overwrite the blob at `blob.key`, attributed to `blob.modified_by`."""

    @abstractmethod
    def get_blob(self, key: str) -> bytes:
        """Return the bytes stored at `key`. Raise `BlobNotFoundError` if absent."""

    @abstractmethod
    def delete_blob(self, key: str, modified_by: str) -> None:
        """Remove `key`. Raise `BlobNotFoundError` if absent."""

    @abstractmethod
    def copy_blob(self, source_key: str, destination_key: str, modified_by: str) -> None:
        """Duplicate `source_key` at `destination_key` without touching the source.

        Raise `BlobNotFoundError` if the source is absent.
        """

    @abstractmethod
    def list_blob_keys(self) -> List[str]:
        """Return every key currently present, in no particular order."""

    @abstractmethod
    def commits(self) -> List[Commit]:
        """Return the recorded changes, oldest first."""
