"""
app.py — Flask application and HTTP API entry point for mediashelf.

Endpoints (local use, no auth):
  GET  /                        — landing page with drives + favorite folders
  GET  /list?path=<p>           — folders, media files and name hash of a directory
  GET  /get-file?path=<p>       — stream a single file (Range requests supported)
  GET  /folder-hash?path=<p>    — name hash only, for cheap change polling
  GET  /static/*                — browser client

Every request reads the filesystem from scratch; nothing is cached and the
only shared state is the read-only Configuration.
"""

from __future__ import annotations

from dataclasses import replace

from dotenv import load_dotenv
from flask import (
    Blueprint,
    Flask,
    current_app,
    jsonify,
    render_template,
    request,
    send_file,
)
from jinja2 import TemplateNotFound

import paths
from config import Configuration
from errors import BadRequest, HttpError, InternalServerError, NotFound
from favorites import build_favorites, render_favorites
from fingerprint import compute_fingerprint
from misc.logger import configure, logger
from snapshot import list_directory

CONFIG_KEY = "MEDIASHELF"

bp = Blueprint("mediashelf", __name__)


def _config() -> Configuration:
    return current_app.config[CONFIG_KEY]


def _path_arg(required: bool = True) -> str:
    raw = request.args.get("path", "")
    if required and not raw:
        raise BadRequest()
    return raw


# ─── / ──────────────────────────────────────────────────────────────────────

@bp.get("/")
def index():
    cfg = _config()
    favorites = build_favorites(paths.list_drive_roots(), cfg.favorite_specs, cfg.home)
    try:
        return render_template("index.html", favs=render_favorites(favorites))
    except TemplateNotFound:
        logger.warning("Could not read index.html")
        raise InternalServerError()


# ─── /list ──────────────────────────────────────────────────────────────────

@bp.get("/list")
def list_folder():
    cfg = _config()
    raw = _path_arg(required=False)

    try:
        resolved = paths.resolve_or_default(
            raw, cfg.home, fallback=cfg.list_fallback_to_default
        )
    except FileNotFoundError:
        raise NotFound()
    if not resolved.exists or not resolved.canonical.is_dir():
        raise NotFound()

    try:
        listing = list_directory(resolved.canonical, cfg.extensions, with_fingerprint=False)
    except FileNotFoundError:
        raise NotFound()
    except OSError as exc:
        logger.warning(f"Could not list {resolved.normalized!r}: {exc.__class__.__name__}")
        raise InternalServerError()

    try:
        fingerprint = compute_fingerprint(resolved.canonical)
    except OSError as exc:
        logger.warning(f"Could not calculate folder hash: {exc.__class__.__name__}")
        raise InternalServerError()

    return jsonify(replace(listing, fingerprint=fingerprint).to_dict())


# ─── /get-file ──────────────────────────────────────────────────────────────

@bp.get("/get-file")
def get_file():
    try:
        resolved = paths.resolve_file(_path_arg())
    except FileNotFoundError:
        raise NotFound()
    except IsADirectoryError:
        raise BadRequest()

    try:
        return send_file(resolved.canonical, conditional=True)
    except OSError as exc:
        logger.warning(f"Could not open {resolved.normalized!r}: {exc.__class__.__name__}")
        raise InternalServerError()


# ─── /folder-hash ───────────────────────────────────────────────────────────

@bp.get("/folder-hash")
def folder_hash():
    try:
        resolved = paths.resolve_directory(_path_arg())
    except FileNotFoundError:
        raise NotFound()
    except NotADirectoryError:
        raise BadRequest()

    try:
        fingerprint = compute_fingerprint(resolved.canonical)
    except OSError as exc:
        logger.warning(f"Could not calculate folder hash: {exc.__class__.__name__}")
        raise InternalServerError()

    return jsonify(fingerprint.to_dict())


# ─── Errors ─────────────────────────────────────────────────────────────────

@bp.app_errorhandler(HttpError)
def handle_http_error(exc: HttpError):
    return jsonify(exc.to_dict()), exc.status_code


# ─── Factory ────────────────────────────────────────────────────────────────

def create_app(config: Configuration | None = None) -> Flask:
    if config is None:
        load_dotenv()
        config = Configuration.from_env()
    configure(config.log_level)

    app = Flask(__name__)
    app.config[CONFIG_KEY] = config

    app.register_blueprint(bp)

    logger.info(f"Configured favorites: {list(config.favorite_specs)}")
    return app


# ─── Entrypoint ─────────────────────────────────────────────────────────────

def main() -> None:
    app = create_app()
    cfg: Configuration = app.config[CONFIG_KEY]
    # threaded=True: one worker thread per request, blocking fs calls are fine
    app.run(host=cfg.host, port=cfg.port, threaded=True)


if __name__ == "__main__":
    main()
