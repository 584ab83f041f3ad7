"""Read-only file server for user-uploaded assets."""
from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=31536000, immutable"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Not every platform's mime table knows the modern image formats.
mimetypes.add_type("image/webp", ".webp")
mimetypes.add_type("image/avif", ".avif")


class UploadForbiddenError(PermissionError):
    """Raised when a requested path resolves outside the asset root."""


@dataclass(slots=True)
class UploadResponse:
    status_code: int
    body: bytes
    media_type: str = "text/plain"
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def error(cls, status_code: int, text: str) -> "UploadResponse":
        return cls(status_code=status_code, body=text.encode("utf-8"))


def guess_content_type(path: Path) -> str:
    guess, _enc = mimetypes.guess_type(path.name)
    return guess or DEFAULT_CONTENT_TYPE


class UploadFileServer:
    """Serve files from a fixed asset root, rejecting traversal attempts.

    Both the root and the requested path are resolved to canonical absolute
    paths (``.``/``..`` and symlinks) before the descendant check.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def resolve(self, segments: Sequence[str]) -> Path:
        try:
            root = self._root.resolve()
            candidate = root.joinpath(*segments).resolve()
        except (OSError, RuntimeError, ValueError) as exc:
            raise UploadForbiddenError(f"Unresolvable upload path: {exc}") from exc
        if not candidate.is_relative_to(root):
            raise UploadForbiddenError(f"Path escapes upload root: {candidate}")
        return candidate

    def serve(self, segments: Sequence[str]) -> UploadResponse:
        if not segments:
            return UploadResponse.error(404, "File not found")

        try:
            path = self.resolve(segments)
        except UploadForbiddenError as exc:
            logger.warning("Rejected upload request %r: %s", "/".join(segments), exc)
            return UploadResponse.error(403, "Forbidden")

        try:
            content = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            logger.debug("Upload not found: %s", path)
            return UploadResponse.error(404, "Not Found")
        except OSError:
            logger.exception("Failed to serve file: %s", path)
            return UploadResponse.error(500, "Internal Server Error")

        return UploadResponse(
            status_code=200,
            body=content,
            media_type=guess_content_type(path),
            headers={"Cache-Control": CACHE_CONTROL},
        )
