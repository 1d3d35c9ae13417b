"""Mapping between drawing ids and blob backend keys.

A mapper is picked once from the configured namespace prefix and handed to
the drawing store. The root marker means ids are stored verbatim; any other
prefix groups drawings under `<prefix>/<id>`.
"""
from __future__ import annotations
from typing import Optional, Protocol, runtime_checkable

ROOT_PREFIX = "/"
DELIMITER = "/"


@runtime_checkable
class KeyMapper(Protocol):
    def to_key(self, drawing_id: str) -> str: ...

    def to_id(self, key: str) -> str: ...

    def contains(self, key: str) -> bool: ...


class RootKeyMapper:
    """Identity mapping used when drawings live at the repository root."""

    prefix = ROOT_PREFIX

    def to_key(self, drawing_id: str) -> str:
        return drawing_id

    def to_id(self, key: str) -> str:
        return key

    def contains(self, key: str) -> bool:
        return len(key) > 0

    def __repr__(self) -> str:
        return "RootKeyMapper()"


class PrefixKeyMapper:
    """Groups drawing keys under a single path segment."""

    def __init__(self, prefix: str) -> None:
        prefix = prefix.rstrip(DELIMITER)
        if not prefix:
            raise ValueError("PrefixKeyMapper requires a non-root prefix")
        self.prefix = prefix
        self._lead = prefix + DELIMITER

    def to_key(self, drawing_id: str) -> str:
        return self._lead + drawing_id

    def to_id(self, key: str) -> str:
        return key[len(self._lead):]

    def contains(self, key: str) -> bool:
        # too short to hold "<prefix>/" or belongs to another namespace
        if len(key) < len(self._lead):
            return False
        return key.startswith(self._lead)

    def __repr__(self) -> str:
        return f"PrefixKeyMapper({self.prefix!r})"


def is_root_prefix(prefix: Optional[str]) -> bool:
    return prefix is None or prefix.strip(DELIMITER) == ""


def key_mapper_for(prefix: Optional[str]) -> KeyMapper:
    """Return the mapper for a configured prefix (`None`, "" and "/" mean root)."""
    if is_root_prefix(prefix):
        return RootKeyMapper()
    return PrefixKeyMapper(prefix)  # type: ignore[arg-type]
