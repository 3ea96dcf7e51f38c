"""Short-token to MIME type resolution."""

from __future__ import annotations

from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Literal

DEFAULT_MIME_TYPE = "application/octet-stream"

MimeMode = Literal["ext", "path"]

_MIME_TYPES = MappingProxyType(
    {
        "bin": DEFAULT_MIME_TYPE,
        "css": "text/css",
        "csv": "text/csv",
        "gif": "image/gif",
        "gz": "application/gzip",
        "htm": "text/html",
        "html": "text/html",
        "ico": "image/vnd.microsoft.icon",
        "jpeg": "image/jpeg",
        "jpg": "image/jpeg",
        "js": "text/javascript",
        "json": "application/json",
        "md": "text/markdown",
        "mp3": "audio/mpeg",
        "mp4": "video/mp4",
        "pdf": "application/pdf",
        "png": "image/png",
        "svg": "image/svg+xml",
        "tar": "application/x-tar",
        "txt": "text/plain",
        "webp": "image/webp",
        "xml": "application/xml",
        "yaml": "application/yaml",
        "yml": "application/yaml",
        "zip": "application/zip",
    }
)


def get_mime_type(token: str, mode: MimeMode = "ext") -> str:
    """Resolve ``token`` to a MIME type string.

    Args:
        token: A file extension (``"json"``, ``".txt"``), a filename or path
            when ``mode`` is ``"path"``, or an already complete MIME type.
        mode: ``"ext"`` to treat the token as an extension, ``"path"`` to
            take the extension from a filename.

    Returns:
        The MIME type, or ``application/octet-stream`` for unknown tokens.
    """
    if mode == "path":
        token = PurePosixPath(token.replace("\\", "/")).suffix
    elif "/" in token:
        return token
    return _MIME_TYPES.get(token.lstrip(".").lower(), DEFAULT_MIME_TYPE)
