"""
fingerprint.py — Order-independent hash of a directory's child names.

Hashes only the *set of names* directly inside a directory: sorted, UTF-8
encoded and fed into SHA-256 back to back. File contents, sizes and
timestamps do not take part, so the hash changes exactly when an entry is
added, removed or renamed. Clients poll it to decide whether to re-list.
"""

from __future__ import annotations

import hashlib
import os
import time
from typing import Iterable, List

from misc.logger import logger
from models import Fingerprint


def _text_names(names: Iterable[str]) -> List[bytes]:
    encoded = []
    for name in names:
        try:
            encoded.append(name.encode("utf-8"))
        except UnicodeEncodeError:
            # undecodable bytes surface as lone surrogates; not text, skip
            continue
    return encoded


def hash_names(names: Iterable[str]) -> str:
    """Hex SHA-256 over the code-point-sorted names."""
    h = hashlib.sha256()
    # UTF-8 byte order matches code point order, so sorting bytes is enough
    for name in sorted(_text_names(names)):
        h.update(name)
    return h.hexdigest()


def compute_fingerprint(directory: os.PathLike | str) -> Fingerprint:
    """Return the name-set fingerprint; raises OSError if it cannot be listed."""
    start = time.perf_counter()
    digest = hash_names(os.listdir(directory))
    duration = time.perf_counter() - start
    logger.trace(f"Fingerprint of {os.fspath(directory)!r} took {duration * 1000:.2f} ms")
    return Fingerprint(hash=digest, duration=duration)
