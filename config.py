"""
config.py — Read-only process configuration loaded from environment variables.

Built once at startup (after `.env` has been loaded) and handed to the Flask
app; nothing mutates it afterwards, so request threads share it without locks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

DEFAULT_EXTENSIONS: Tuple[str, ...] = (
    ".jpg",
    ".jpeg",
    ".png",
    ".svg",
    ".gif",
    ".webp",
    ".webm",
    ".mp4",
    ".mkv",
)

_TRUTHY = {"1", "true", "yes", "on"}


def split_list(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(";") if part.strip())


def _extension(raw: str) -> str:
    ext = raw.lower()
    return ext if ext.startswith(".") else f".{ext}"


@dataclass(frozen=True)
class Configuration:
    favorite_specs: Tuple[str, ...] = ()
    home: Path = field(default_factory=Path.home)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    # /list on a missing path: 404 (False) or silently show the default path
    list_fallback_to_default: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        env = os.environ if environ is None else environ

        extensions = DEFAULT_EXTENSIONS
        if env.get("MEDIA_EXTENSIONS", "").strip():
            extensions = tuple(_extension(e) for e in split_list(env["MEDIA_EXTENSIONS"]))

        return cls(
            favorite_specs=split_list(env.get("FAV_FOLDERS", "")),
            extensions=extensions,
            host=env.get("HOST", "127.0.0.1"),
            port=int(env.get("PORT", "5000")),
            log_level=env.get("LOG_LEVEL", "INFO"),
            list_fallback_to_default=(
                env.get("LIST_FALLBACK_TO_DEFAULT", "").strip().lower() in _TRUTHY
            ),
        )

    def to_dict(self) -> dict:
        return {
            "favorite_specs": list(self.favorite_specs),
            "home": str(self.home),
            "extensions": list(self.extensions),
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
            "list_fallback_to_default": self.list_fallback_to_default,
        }
