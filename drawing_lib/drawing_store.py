"""Drawing store: CRUD, copy and title listing over a blob backend.

The store holds only its configuration (a blob backend and a key mapper)
and never caches content, so one instance can serve concurrent callers.
Consistency for a given key is whatever the blob backend provides.
"""
from __future__ import annotations
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterator, Optional, TextIO, Union

from drawing_lib.blobstore import BlobInfo, create_blob_store
from drawing_lib.blobstore.interfaces import BlobStoreProtocol
from drawing_lib.errors import BackendError, ContentFormatError, InputReadError, SchemaError
from drawing_lib.keys import KeyMapper, key_mapper_for
from drawing_lib.titles import extract_title

module_logger = logging.getLogger(__name__)

Content = Union[BinaryIO, TextIO, bytes, bytearray]


class DrawingStore:
    """Maps drawing ids onto blob keys and indexes drawings by title.

    Args:
        blob_store: backend implementing `BlobStoreProtocol`
        key_mapper: a `KeyMapper`, or a namespace prefix to build one from
        logger: logger to use instead of the module logger
        on_skipped_key: called with each backend key that `list_drawings`
            leaves out because it lies outside the drawing namespace
    """

    def __init__(
        self,
        blob_store: BlobStoreProtocol,
        key_mapper: KeyMapper | str | None = None,
        *,
        logger: Optional[logging.Logger] = None,
        on_skipped_key: Optional[Callable[[str], None]] = None,
    ) -> None:
        if not isinstance(key_mapper, KeyMapper):
            key_mapper = key_mapper_for(key_mapper)
        self._blobs = blob_store
        self._keys = key_mapper
        self._log = logger or module_logger
        self._on_skipped_key = on_skipped_key

    @property
    def key_mapper(self) -> KeyMapper:
        return self._keys

    @contextmanager
    def _backend_call(self, operation: str, drawing_id: Optional[str]) -> Iterator[None]:
        try:
            yield
        except BackendError as e:
            raise e.wrap(operation, drawing_id) from e
        except OSError as e:
            raise BackendError(str(e), operation=operation, subject=drawing_id) from e

    @staticmethod
    def _drain(drawing_id: str, content: Content) -> bytes:
        if isinstance(content, (bytes, bytearray)):
            return bytes(content)
        try:
            data = content.read()
            if isinstance(data, str):
                data = data.encode("utf-8")
        except Exception as e:
            raise InputReadError(f"failed to read content: {e}", operation="put_drawing", subject=drawing_id) from e
        # non-blocking raw streams return None when no data is ready
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InputReadError(
                f"stream returned {type(data).__name__} instead of bytes",
                operation="put_drawing",
                subject=drawing_id,
            )
        return bytes(data)

    def put_drawing(self, drawing_id: str, content: Content, modified_by: str) -> None:
        """Store `content` as the drawing `drawing_id`, replacing any previous version."""
        blob = BlobInfo(
            key=self._keys.to_key(drawing_id),
            content=self._drain(drawing_id, content),
            modified_by=modified_by,
        )
        with self._backend_call("put_drawing", drawing_id):
            self._blobs.add_blob(blob)
        self._log.debug("Stored drawing %s (%d bytes) for %s", drawing_id, len(blob.content), modified_by)

    def get_drawing(self, drawing_id: str) -> bytes:
        with self._backend_call("get_drawing", drawing_id):
            return self._blobs.get_blob(self._keys.to_key(drawing_id))

    def delete_drawing(self, drawing_id: str, modified_by: str) -> None:
        with self._backend_call("delete_drawing", drawing_id):
            self._blobs.delete_blob(self._keys.to_key(drawing_id), modified_by)
        self._log.debug("Deleted drawing %s for %s", drawing_id, modified_by)

    def copy_drawing(self, source_id: str, destination_id: str, modified_by: str) -> None:
        # the backend decides whether the source exists
        with self._backend_call("copy_drawing", source_id):
            self._blobs.copy_blob(self._keys.to_key(source_id), self._keys.to_key(destination_id), modified_by)
        self._log.debug("Copied drawing %s to %s for %s", source_id, destination_id, modified_by)

    def list_drawings(self) -> Dict[str, str]:
        """Return `{drawing_id: title}` for every drawing in the namespace.

        Keys outside the namespace are skipped. Any drawing that cannot be
        read or indexed fails the whole call; no partial result is returned.
        """
        with self._backend_call("list_drawings", None):
            keys = self._blobs.list_blob_keys()

        drawings: Dict[str, str] = {}
        for key in keys:
            if not self._keys.contains(key):
                self._log.debug("Skipping key outside drawing namespace: %s", key)
                if self._on_skipped_key is not None:
                    self._on_skipped_key(key)
                continue

            drawing_id = self._keys.to_id(key)
            with self._backend_call("list_drawings", drawing_id):
                content = self._blobs.get_blob(key)
            try:
                drawings[drawing_id] = extract_title(content)
            except (ContentFormatError, SchemaError) as e:
                raise e.wrap("list_drawings", key) from e

        self._log.debug("Listed %d drawings", len(drawings))
        return drawings


def open_drawing_store(
    location: str | Path | None,
    prefix: Optional[str] = None,
    backend: str = "file",
    logger: Optional[logging.Logger] = None,
    on_skipped_key: Optional[Callable[[str], None]] = None,
) -> DrawingStore:
    """Open (creating if needed) a blob repository and return a store over it.

    Raises `RepositoryInitError` when the repository cannot be initialised.
    """
    blob_store = create_blob_store(backend, location)
    blob_store.create_repository()
    (logger or module_logger).info("Opened %s drawing store at %s (prefix %r)", backend, location, prefix)
    return DrawingStore(blob_store, key_mapper_for(prefix), logger=logger, on_skipped_key=on_skipped_key)
