"""
paths.py — Path normalization, canonicalization and default locations.

Client paths arrive as raw strings (possibly Windows-style); everything
handed back to the client goes through `normalize()` so it only ever
contains forward slashes.
"""

from __future__ import annotations

import os
import string
from pathlib import Path
from typing import Callable, List, Optional, Union

from misc.logger import logger
from models import ResolvedPath

PathLike = Union[str, "os.PathLike[str]"]

_EXTENDED_PREFIX = "//?/"
_EXTENDED_UNC_PREFIX = "//?/UNC/"


def normalize(path: PathLike) -> str:
    """Forward slashes, no `\\\\?\\` prefix. Case is left alone."""
    normalized = os.fspath(path).replace("\\", "/")
    if normalized.startswith(_EXTENDED_UNC_PREFIX):
        return "//" + normalized[len(_EXTENDED_UNC_PREFIX):]
    if normalized.startswith(_EXTENDED_PREFIX):
        return normalized[len(_EXTENDED_PREFIX):]
    return normalized


def canonicalize(path: PathLike) -> ResolvedPath:
    """
    Resolve symlinks and relative segments, verifying the target exists.

    Never raises: when the OS cannot resolve the path the result carries the
    unresolved input and `exists=False`, so a display string is still available.
    """
    raw = os.fspath(path)
    try:
        canonical = Path(raw).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as exc:
        # RuntimeError: symlink loop on older interpreters; ValueError: embedded NUL
        logger.trace(f"Could not canonicalize {raw!r}: {exc.__class__.__name__}")
        return ResolvedPath(raw=raw, normalized=normalize(raw), canonical=Path(raw), exists=False)
    return ResolvedPath(raw=raw, normalized=normalize(canonical), canonical=canonical, exists=True)


def resolve_directory(path: PathLike) -> ResolvedPath:
    """Canonicalize, raising FileNotFoundError / NotADirectoryError on failure."""
    resolved = canonicalize(path)
    if not resolved.exists:
        raise FileNotFoundError(resolved.raw)
    if not resolved.canonical.is_dir():
        raise NotADirectoryError(resolved.raw)
    return resolved


def resolve_file(path: PathLike) -> ResolvedPath:
    """Canonicalize, raising FileNotFoundError / IsADirectoryError on failure."""
    resolved = canonicalize(path)
    if not resolved.exists:
        raise FileNotFoundError(resolved.raw)
    if not resolved.canonical.is_file():
        raise IsADirectoryError(resolved.raw)
    return resolved


def default_path(home: Path) -> Path:
    pictures = home / "Pictures"
    if pictures.is_dir():
        return pictures
    return home


def resolve_or_default(raw: str, home: Path, fallback: bool = True) -> ResolvedPath:
    """
    Resolve a client path, using the default location for empty input.

    A path that cannot be canonicalized either falls back to the default
    location (`fallback=True`) or raises FileNotFoundError.
    """
    if not raw:
        return canonicalize(default_path(home))

    resolved = canonicalize(raw)
    if resolved.exists:
        return resolved
    if not fallback:
        raise FileNotFoundError(raw)

    logger.info(f"Path {resolved.normalized!r} not found, using default location")
    return canonicalize(default_path(home))


def expand_tilde(path: PathLike, home: Path) -> Path:
    """Rebase `~/...` onto `home`; anything else is returned unchanged."""
    normalized = normalize(path)
    if normalized == "~":
        return home
    if normalized.startswith("~/"):
        return home / normalized[2:]
    return Path(normalized)


def list_drive_roots(
    windows: Optional[bool] = None,
    probe: Callable[[str], bool] = os.path.isdir,
) -> List[str]:
    """Existing `X:\\` drive roots on Windows, an empty list elsewhere."""
    if windows is None:
        windows = os.name == "nt"
    if not windows:
        return []
    return [f"{letter}:\\" for letter in string.ascii_uppercase if probe(f"{letter}:\\")]
