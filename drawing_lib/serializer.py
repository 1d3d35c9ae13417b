from typing import Any, Protocol
import json
import yaml


class Serializer(Protocol):
    """Serialize/deserialize Python values for code that stores bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    """

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (UTF-8 text).

    `load` raises `ValueError` (including `UnicodeDecodeError` and
    `json.JSONDecodeError`) when the bytes are not valid UTF-8 JSON.
    """

    def __init__(self, *, sort_keys: bool = False) -> None:
        self.sort_keys = sort_keys

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, sort_keys=self.sort_keys, separators=(",", ":")).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text). Caller must ensure values are YAML-serializable."""

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))
