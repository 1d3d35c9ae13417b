"""Drawing store configuration.

Settings live in a small YAML file:

    location: ./data/drawings
    drawings_prefix: drawings
    backend: file
    log_level: INFO

Missing keys fall back to the defaults on `StoreConfig`; a missing file
yields the defaults altogether.
"""
from __future__ import annotations
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from drawing_lib.blobstore import BACKENDS
from drawing_lib.keys import ROOT_PREFIX
from drawing_lib.serializer import Serializer, YAMLSerializer

CONFIG_ENV = "DRAWINGS_CONFIG"
DEFAULT_CONFIG_PATH = Path("data/config/drawings.yml")

_yaml: Serializer = YAMLSerializer()


@dataclass
class StoreConfig:
    location: str = "./data/drawings"
    drawings_prefix: str = ROOT_PREFIX
    backend: str = "file"
    log_level: str = "WARNING"

    def with_overrides(self, **overrides: Any) -> "StoreConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def parse_config(raw: bytes | str) -> StoreConfig:
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    try:
        data: Any = _yaml.load(raw)
    except Exception as e:
        raise ValueError("invalid config format: parse error") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("invalid config format: expected mapping")

    known = {f.name for f in fields(StoreConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"invalid config format: unknown keys {', '.join(map(str, unknown))}")

    cfg = StoreConfig(**{k: str(v) for k, v in data.items() if v is not None})
    if cfg.backend not in BACKENDS:
        raise ValueError(f"invalid config: backend must be one of {', '.join(BACKENDS)}")
    return cfg


def resolve_config_path(path: Optional[str | Path] = None) -> Path:
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def load_config(path: Optional[str | Path] = None) -> StoreConfig:
    """Load configuration from `path`, `$DRAWINGS_CONFIG` or the default location."""
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        return StoreConfig()
    return parse_config(cfg_path.read_bytes())


def dump_config(cfg: StoreConfig) -> bytes:
    return _yaml.dump(asdict(cfg))
