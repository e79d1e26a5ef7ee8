"""Tests for the HTTP endpoints in app.py."""

import os
import re
import tempfile
from pathlib import Path
from unittest.mock import patch

from jinja2 import TemplateNotFound

from app import create_app
from config import Configuration


def _make_app(home, **overrides):
    return create_app(Configuration(home=Path(home), **overrides))


def _touch(path, data=b"x" * 32):
    with open(path, "wb") as f:
        f.write(data)


def _populate(tmpdir):
    os.mkdir(os.path.join(tmpdir, "X"))
    os.mkdir(os.path.join(tmpdir, "Y"))
    _touch(os.path.join(tmpdir, "img.png"))
    _touch(os.path.join(tmpdir, "doc.txt"))


# ── GET / ───────────────────────────────────────────────────────────────────

def test_index_renders_favorites():
    with tempfile.TemporaryDirectory() as home:
        os.mkdir(os.path.join(home, "Notes"))
        app = _make_app(home, favorite_specs=("~/Notes", "~/Missing"))
        with app.test_client() as client:
            resp = client.get("/")
            assert resp.status_code == 200
            html = resp.get_data(as_text=True)
            assert "{{" not in html
            assert ">Notes</a>" in html
            assert f'data-folder="{(Path(home) / "Notes").as_posix()}"' in html
            assert "Missing" not in html


def test_index_lists_drives():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with patch("app.paths.list_drive_roots", return_value=["C:\\"]):
            with app.test_client() as client:
                html = client.get("/").get_data(as_text=True)
    assert 'data-folder="C:/"' in html


def test_index_template_missing():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with patch("app.render_template", side_effect=TemplateNotFound("index.html")):
            with app.test_client() as client:
                resp = client.get("/")
                assert resp.status_code == 500
                assert resp.get_json() == {"error": "Internal Server Error"}


# ── GET /list ───────────────────────────────────────────────────────────────

def test_list_directory():
    with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as tmpdir:
        _populate(tmpdir)
        app = _make_app(home)
        with app.test_client() as client:
            resp = client.get("/list", query_string={"path": tmpdir})
            assert resp.status_code == 200
            data = resp.get_json()

    assert data["canonical_path"] == Path(tmpdir).resolve().as_posix()
    assert data["folders"][0]["name"] == ".."
    assert {f["name"] for f in data["folders"][1:]} == {"X", "Y"}
    assert [f["name"] for f in data["files"]] == ["img.png"]
    assert re.fullmatch(r"[0-9a-f]{64}", data["hash"]["hash"])


def test_list_empty_path_uses_default():
    with tempfile.TemporaryDirectory() as home:
        os.mkdir(os.path.join(home, "Pictures"))
        app = _make_app(home)
        with app.test_client() as client:
            for resp in (client.get("/list?path="), client.get("/list")):
                assert resp.status_code == 200
                assert resp.get_json()["canonical_path"] == (
                    (Path(home) / "Pictures").resolve().as_posix()
                )


def test_list_missing_path_not_found():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with app.test_client() as client:
            resp = client.get("/list", query_string={"path": "/definitely/missing"})
            assert resp.status_code == 404
            assert resp.get_json() == {"error": "Not Found"}


def test_list_missing_path_with_fallback():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home, list_fallback_to_default=True)
        with app.test_client() as client:
            resp = client.get("/list", query_string={"path": "/definitely/missing"})
            assert resp.status_code == 200
            assert resp.get_json()["canonical_path"] == Path(home).resolve().as_posix()


def test_list_file_not_found():
    with tempfile.TemporaryDirectory() as home:
        path = os.path.join(home, "img.png")
        _touch(path)
        app = _make_app(home)
        with app.test_client() as client:
            assert client.get("/list", query_string={"path": path}).status_code == 404


def test_list_unreadable_directory_is_server_error():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with patch("snapshot.os.scandir", side_effect=PermissionError("denied /secret")):
            with app.test_client() as client:
                resp = client.get("/list", query_string={"path": home})
                assert resp.status_code == 500
                assert "secret" not in resp.get_data(as_text=True)


def test_list_hash_failure_is_server_error():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with patch("app.compute_fingerprint", side_effect=OSError("boom")):
            with app.test_client() as client:
                resp = client.get("/list", query_string={"path": home})
                assert resp.status_code == 500


# ── GET /folder-hash ────────────────────────────────────────────────────────

def test_folder_hash_stable():
    with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as tmpdir:
        _populate(tmpdir)
        app = _make_app(home)
        with app.test_client() as client:
            first = client.get("/folder-hash", query_string={"path": tmpdir})
            second = client.get("/folder-hash", query_string={"path": tmpdir})
            listed = client.get("/list", query_string={"path": tmpdir})
    assert first.status_code == 200
    assert re.fullmatch(r"[0-9a-f]{64}", first.get_json()["hash"])
    assert first.get_json()["hash"] == second.get_json()["hash"]
    assert listed.get_json()["hash"]["hash"] == first.get_json()["hash"]


def test_folder_hash_changes_on_new_entry():
    with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as tmpdir:
        app = _make_app(home)
        with app.test_client() as client:
            before = client.get("/folder-hash", query_string={"path": tmpdir}).get_json()
            _touch(os.path.join(tmpdir, "new.jpg"))
            after = client.get("/folder-hash", query_string={"path": tmpdir}).get_json()
    assert before["hash"] != after["hash"]


def test_folder_hash_errors():
    with tempfile.TemporaryDirectory() as home:
        path = os.path.join(home, "img.png")
        _touch(path)
        app = _make_app(home)
        with app.test_client() as client:
            assert client.get("/folder-hash").status_code == 400
            assert client.get("/folder-hash", query_string={"path": path}).status_code == 400
            missing = client.get("/folder-hash", query_string={"path": "/definitely/missing"})
            assert missing.status_code == 404


# ── GET /get-file ───────────────────────────────────────────────────────────

def test_get_file_streams_bytes():
    with tempfile.TemporaryDirectory() as home:
        path = os.path.join(home, "img.png")
        _touch(path, b"\x89PNG fake image bytes")
        app = _make_app(home)
        with app.test_client() as client:
            resp = client.get("/get-file", query_string={"path": path})
            assert resp.status_code == 200
            assert resp.data == b"\x89PNG fake image bytes"
            assert resp.mimetype == "image/png"
            resp.close()


def test_get_file_range_request():
    with tempfile.TemporaryDirectory() as home:
        path = os.path.join(home, "clip.mp4")
        _touch(path, b"0123456789")
        app = _make_app(home)
        with app.test_client() as client:
            resp = client.get(
                "/get-file", query_string={"path": path}, headers={"Range": "bytes=2-5"}
            )
            assert resp.status_code == 206
            assert resp.data == b"2345"
            resp.close()


def test_get_file_errors():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with app.test_client() as client:
            assert client.get("/get-file").status_code == 400
            assert client.get("/get-file", query_string={"path": home}).status_code == 400
            missing = client.get("/get-file", query_string={"path": "/definitely/missing.jpg"})
            assert missing.status_code == 404
            assert missing.get_json() == {"error": "Not Found"}


def test_embedded_nul_path_is_not_found():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with app.test_client() as client:
            for route in ("/list", "/folder-hash", "/get-file"):
                resp = client.get(route, query_string={"path": "/tmp/a\x00b"})
                assert resp.status_code == 404, route
                assert resp.get_json() == {"error": "Not Found"}


def test_static_client_served():
    with tempfile.TemporaryDirectory() as home:
        app = _make_app(home)
        with app.test_client() as client:
            resp = client.get("/static/js/app.js")
            assert resp.status_code == 200
            body = resp.get_data(as_text=True)
            resp.close()
    assert "MAX_CACHED_IMAGES = 50" in body
    assert "/folder-hash?" in body
