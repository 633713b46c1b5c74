"""Avatar download and inline data URI encoding."""

from __future__ import annotations

import base64
import http.client
import logging
import mimetypes
import posixpath
import urllib.request
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
)


class AvatarFetchError(Exception):
    """Raised when an avatar cannot be downloaded or read."""


def sniff_content_type(data: bytes) -> str:
    """Guess an image content type from the leading bytes of ``data``."""
    head = data[:512]
    if head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"
    for signature, content_type in _SIGNATURES:
        if head.startswith(signature):
            return content_type
    text = head.lstrip()
    if text.startswith(b"<svg") or (text.startswith(b"<?xml") and b"<svg" in head):
        return "image/svg+xml"
    return DEFAULT_CONTENT_TYPE


def detect_content_type(url: str, header: str | None, data: bytes) -> str:
    """Pick a content type: response header, then URL extension, then sniffing."""
    if header:
        return header

    path = urlparse(url).path
    if posixpath.splitext(path)[1]:
        guessed, _ = mimetypes.guess_type(path)
        if guessed:
            return guessed

    return sniff_content_type(data)


def fetch_avatar_data_uri(url: str) -> str:
    """Download ``url`` and return it as a base64 ``data:`` URI.

    The whole payload is held in memory; there is no size cap.
    """
    try:
        response = urllib.request.urlopen(url)
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise AvatarFetchError(f"failed to download avatar: {e}") from e

    with response:
        try:
            data = response.read()
        except (OSError, http.client.HTTPException) as e:
            raise AvatarFetchError(f"failed to read avatar data: {e}") from e
        header = response.headers.get("Content-Type")

    content_type = detect_content_type(url, header, data)
    logger.info(f"Inlined avatar image ({content_type}, {len(data)} bytes)")

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
