from typing import List, Protocol, runtime_checkable

from drawing_lib.blobstore.base import BlobInfo, Commit


@runtime_checkable
class BlobStoreProtocol(Protocol):
    """Blob backend protocol mirroring `drawing_lib.blobstore.BlobStore`.

    Implementations should follow the semantics documented on the abstract
    base class in `drawing_lib.blobstore.base` (BlobNotFoundError for
    missing keys, thread-safety, attributed mutations).
    """

    def create_repository(self) -> None: ...

    def add_blob(self, blob: BlobInfo) -> None: ...

    def get_blob(self, key: str) -> bytes: ...

    def delete_blob(self, key: str, modified_by: str) -> None: ...

    def copy_blob(self, source_key: str, destination_key: str, modified_by: str) -> None: ...

    def list_blob_keys(self) -> List[str]: ...

    def commits(self) -> List[Commit]: ...
