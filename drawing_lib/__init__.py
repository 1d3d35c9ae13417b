"""Drawing store over a versioned blob repository."""

from .drawing_store import DrawingStore, open_drawing_store
from .errors import (
    BackendError,
    BlobNotFoundError,
    ContentFormatError,
    DrawingStoreError,
    InputReadError,
    MissingTitleError,
    RepositoryInitError,
    SchemaError,
    TitleTypeError,
)
from .keys import ROOT_PREFIX, KeyMapper, PrefixKeyMapper, RootKeyMapper, key_mapper_for
from .titles import extract_title

__all__ = [
    "DrawingStore",
    "open_drawing_store",
    "KeyMapper",
    "PrefixKeyMapper",
    "RootKeyMapper",
    "ROOT_PREFIX",
    "key_mapper_for",
    "extract_title",
    "DrawingStoreError",
    "InputReadError",
    "BackendError",
    "BlobNotFoundError",
    "RepositoryInitError",
    "ContentFormatError",
    "SchemaError",
    "MissingTitleError",
    "TitleTypeError",
]
