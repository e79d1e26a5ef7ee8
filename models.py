"""
models.py — Request-scoped value objects for mediashelf.

Nothing here outlives the request that built it. Every object knows how to
render itself for the JSON responses via `to_dict()`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

# hex digest of nothing-in-particular, used when a real hash cannot be computed
PLACEHOLDER_HASH = "0" * 64


class EntryKind(str, Enum):
    FOLDER = "folder"
    FILE = "file"


# ── Paths ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ResolvedPath:
    """
    A client- or operator-supplied path after canonicalization.

    `canonical` is only the real, symlink-free location when `exists` is True;
    otherwise it is the unresolved input and `exists` doubles as the
    degraded marker.
    """
    raw: str
    normalized: str
    canonical: Path
    exists: bool

    @property
    def degraded(self) -> bool:
        return not self.exists


# ── Directory entries ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DirectoryEntry(ABC):
    name: str
    path: str
    symlink: bool = False

    @property
    @abstractmethod
    def kind(self) -> EntryKind: ...

    def to_dict(self) -> dict:
        return {"name": self.name, "path": self.path, "symlink": self.symlink}


@dataclass(frozen=True)
class FolderEntry(DirectoryEntry):

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FOLDER


@dataclass(frozen=True)
class FileEntry(DirectoryEntry):
    mtime: float = 0.0
    mtime_degraded: bool = False

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FILE

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["mtime"] = self.mtime
        d["mtime_degraded"] = self.mtime_degraded
        return d


# ── Fingerprint ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Fingerprint:
    """SHA-256 over a directory's sorted child names, plus optional timing."""
    hash: str
    duration: Optional[float] = None

    @staticmethod
    def placeholder() -> Fingerprint:
        return Fingerprint(hash=PLACEHOLDER_HASH)

    @property
    def is_placeholder(self) -> bool:
        return self.hash == PLACEHOLDER_HASH

    def to_dict(self) -> dict:
        return {"hash": self.hash, "duration": self.duration}


# ── Listing ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DirectoryListing:
    canonical_path: str
    folders: List[FolderEntry] = field(default_factory=list)
    files: List[FileEntry] = field(default_factory=list)
    fingerprint: Fingerprint = field(default_factory=Fingerprint.placeholder)
    skipped: int = 0

    @property
    def entries(self) -> List[DirectoryEntry]:
        """Parent entry first, then the remaining folders, then files."""
        return [*self.folders, *self.files]

    def to_dict(self) -> dict:
        return {
            "canonical_path": self.canonical_path,
            "folders": [f.to_dict() for f in self.folders],
            "files": [f.to_dict() for f in self.files],
            "hash": self.fingerprint.to_dict(),
        }


# ── Favorites ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Favorite:
    display_name: str
    path: str

    def to_dict(self) -> dict:
        return {"name": self.display_name, "path": self.path}
