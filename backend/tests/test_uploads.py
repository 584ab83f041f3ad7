from __future__ import annotations

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.services.uploads import CACHE_CONTROL, UploadFileServer


@pytest.fixture
def upload_root(tmp_path: Path) -> Path:
    root = tmp_path / "public" / "uploads"
    (root / "products").mkdir(parents=True)
    (root / "products" / "image.webp").write_bytes(b"RIFF\x00\x00\x00\x00WEBPVP8 ")
    (root / "notes.unknownext").write_bytes(b"opaque")
    (tmp_path / "secret.txt").write_text("top secret", encoding="utf-8")
    return root


def test_serves_existing_file_with_type_and_cache_headers(upload_root: Path) -> None:
    result = UploadFileServer(upload_root).serve(["products", "image.webp"])

    assert result.status_code == 200
    assert result.body == (upload_root / "products" / "image.webp").read_bytes()
    assert result.media_type == "image/webp"
    assert result.headers["Cache-Control"] == "public, max-age=31536000, immutable"


def test_unknown_extension_defaults_to_octet_stream(upload_root: Path) -> None:
    result = UploadFileServer(upload_root).serve(["notes.unknownext"])
    assert result.status_code == 200
    assert result.media_type == "application/octet-stream"


def test_missing_file_is_not_found(upload_root: Path) -> None:
    assert UploadFileServer(upload_root).serve(["missing.png"]).status_code == 404


def test_empty_segments_are_not_found(upload_root: Path) -> None:
    assert UploadFileServer(upload_root).serve([]).status_code == 404


def test_directory_is_not_found(upload_root: Path) -> None:
    assert UploadFileServer(upload_root).serve(["products"]).status_code == 404


@pytest.mark.parametrize(
    "segments",
    [
        ["..", "..", "etc", "passwd"],
        ["..", "secret.txt"],
        ["products", "..", "..", "secret.txt"],
        ["/etc", "passwd"],
    ],
)
def test_traversal_is_forbidden(upload_root: Path, segments: list[str]) -> None:
    result = UploadFileServer(upload_root).serve(segments)
    assert result.status_code == 403
    assert b"secret" not in result.body


def test_dot_segments_inside_root_are_allowed(upload_root: Path) -> None:
    result = UploadFileServer(upload_root).serve(["products", ".", "..", "products", "image.webp"])
    assert result.status_code == 200


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_escaping_root_is_forbidden(upload_root: Path, tmp_path: Path) -> None:
    (upload_root / "escape.txt").symlink_to(tmp_path / "secret.txt")
    result = UploadFileServer(upload_root).serve(["escape.txt"])
    assert result.status_code == 403


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs unprivileged posix user")
def test_unreadable_file_is_server_error(upload_root: Path) -> None:
    locked = upload_root / "locked.png"
    locked.write_bytes(b"\x89PNG")
    locked.chmod(0)
    try:
        assert UploadFileServer(upload_root).serve(["locked.png"]).status_code == 500
    finally:
        locked.chmod(0o644)


def test_uploads_route(client: TestClient, env: Path) -> None:
    root = env / "uploads"
    (root / "products").mkdir(parents=True, exist_ok=True)
    (root / "products" / "image.webp").write_bytes(b"webp-bytes")

    r = client.get("/uploads/products/image.webp")
    assert r.status_code == 200
    assert r.content == b"webp-bytes"
    assert r.headers["content-type"] == "image/webp"
    assert r.headers["cache-control"] == CACHE_CONTROL

    assert client.get("/uploads/missing.png").status_code == 404
    assert client.get("/uploads/").status_code == 404
