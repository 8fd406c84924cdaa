"""Local state directory; it currently only holds the HTTP cache."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "tweetdrop"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def http_cache_path(self, *, create: bool = True) -> Path:
        if create:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir / HTTP_CACHE_FILENAME


def get_storage_config() -> StorageConfig:
    """``TWEETDROP_DATA_DIR`` if set, else ``$XDG_DATA_HOME/tweetdrop``."""

    explicit = optional_env_var("TWEETDROP_DATA_DIR")
    if explicit is not None:
        return StorageConfig(data_dir=Path(explicit).expanduser().resolve())
    xdg_home = optional_env_var("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=(base / APP_DIR_NAME).expanduser().resolve())
