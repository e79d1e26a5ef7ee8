"""
snapshot.py — One-shot listing of a single directory for the browser.

Behaviour:
  - First entry is always a synthetic ".." folder pointing at the parent
  - Children are classified by their (symlink-followed) target
  - Folders are always listed; files only when their name ends with a
    media extension (case-insensitive suffix match, not an extension parse)
  - A child whose metadata cannot be read is logged and skipped; only
    failing to open the directory itself aborts the listing
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterable, List, Tuple

from config import DEFAULT_EXTENSIONS
from fingerprint import compute_fingerprint
from misc.logger import logger
from models import DirectoryListing, FileEntry, Fingerprint, FolderEntry
from paths import normalize

MEDIA_EXTENSIONS = DEFAULT_EXTENSIONS


def is_media_file(name: str, extensions: Iterable[str] = MEDIA_EXTENSIONS) -> bool:
    return name.lower().endswith(tuple(extensions))


def parent_entry(directory: Path) -> FolderEntry:
    # Path("/").parent == Path("/"), so a root points at itself
    return FolderEntry(name="..", path=normalize(directory.parent), symlink=False)


def _mtime(entry: os.DirEntry) -> Tuple[float, bool]:
    """Modification time of the entry itself; (0.0, True) when unavailable."""
    try:
        return float(entry.stat(follow_symlinks=False).st_mtime), False
    except (OSError, OverflowError, ValueError) as exc:
        logger.warning(f"Could not read mtime of {entry.path!r}: {exc.__class__.__name__}")
        return 0.0, True


def list_directory(
    directory: Path,
    extensions: Iterable[str] = MEDIA_EXTENSIONS,
    with_fingerprint: bool = True,
) -> DirectoryListing:
    """
    List the immediate children of an already-canonical directory.

    Raises OSError if the directory cannot be opened. When `with_fingerprint`
    is set, the name-set hash is computed from the same directory; a hashing
    failure propagates as well.
    """
    directory = Path(directory)
    suffixes = tuple(ext.lower() for ext in extensions)

    folders: List[FolderEntry] = [parent_entry(directory)]
    files: List[FileEntry] = []
    skipped = 0

    with os.scandir(directory) as it:
        for entry in it:
            try:
                symlink = entry.is_symlink()
                target = os.stat(entry.path)  # follows symlinks
            except OSError as exc:
                logger.warning(
                    f"Skipping {entry.path!r}: could not read metadata ({exc.__class__.__name__})"
                )
                skipped += 1
                continue

            path = normalize(entry.path)
            if stat.S_ISDIR(target.st_mode):
                folders.append(FolderEntry(name=entry.name, path=path, symlink=symlink))
                continue

            if not is_media_file(entry.name, suffixes):
                continue

            mtime, degraded = _mtime(entry)
            files.append(
                FileEntry(
                    name=entry.name,
                    path=path,
                    symlink=symlink,
                    mtime=mtime,
                    mtime_degraded=degraded,
                )
            )

    logger.trace(
        f"Listed {directory}: folders={len(folders) - 1} files={len(files)} skipped={skipped}"
    )

    fingerprint = compute_fingerprint(directory) if with_fingerprint else Fingerprint.placeholder()

    return DirectoryListing(
        canonical_path=normalize(directory),
        folders=folders,
        files=files,
        fingerprint=fingerprint,
        skipped=skipped,
    )
