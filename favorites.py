"""
favorites.py — Quick-access locations for the landing page.

Rebuilt on every `/` request from live state: drives that exist right now,
plus the configured favorite folders that currently exist on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from markupsafe import Markup

from misc.logger import logger
from models import Favorite
from paths import expand_tilde, normalize


def build_favorites(
    drive_roots: Iterable[str],
    favorite_specs: Iterable[str],
    home: Path,
) -> List[Favorite]:
    """Drives first, then configured favorites in the order given."""
    favorites = [Favorite(display_name=drive, path=normalize(drive)) for drive in drive_roots]

    for spec in favorite_specs:
        fav_path = expand_tilde(spec, home)

        name = fav_path.name
        if not name:
            logger.warning(f"Favorite {spec!r} has no folder name, skipping")
            continue

        if not fav_path.exists():
            logger.warning(f"Favorite {spec!r} does not exist, skipping")
            continue

        logger.info(f"Favorite {name!r} -> {fav_path}")
        favorites.append(Favorite(display_name=name, path=normalize(fav_path)))

    return favorites


def render_favorite(favorite: Favorite) -> Markup:
    return Markup(
        '<div><a href="{path}" title="{name}" data-folder="{path}">{name}</a></div>'
    ).format(path=favorite.path, name=favorite.display_name)


def render_favorites(favorites: Iterable[Favorite]) -> Markup:
    return Markup("").join(render_favorite(f) for f in favorites)
