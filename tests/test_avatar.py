"""Tests for avatar fetching and content type detection."""

import base64
import io
import urllib.error
from unittest import mock

import pytest

from teams_notifier.avatar import (
    AvatarFetchError,
    detect_content_type,
    fetch_avatar_data_uri,
    sniff_content_type,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class FakeResponse:
    def __init__(self, data: bytes, headers: dict | None = None):
        self._data = data
        self.headers = headers or {}
    
    def read(self):
        return self._data
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc, tb):
        return False


class TestSniffContentType:
    @pytest.mark.parametrize("data,expected", [
        (PNG_BYTES, "image/png"),
        (b"\xff\xd8\xff\xe0rest", "image/jpeg"),
        (b"GIF89a....", "image/gif"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b"  <svg xmlns='http://www.w3.org/2000/svg'/>", "image/svg+xml"),
        (b"random bytes", "application/octet-stream"),
    ])
    def test_signatures(self, data, expected):
        assert sniff_content_type(data) == expected


class TestDetectContentType:
    def test_header_first(self):
        assert detect_content_type("https://x/a.png", "image/jpeg", PNG_BYTES) == "image/jpeg"
    
    def test_extension_second(self):
        assert detect_content_type("https://x/avatar.gif?s=80", None, PNG_BYTES) == "image/gif"
    
    def test_sniff_last(self):
        assert detect_content_type("https://x/u/123?v=4", "", PNG_BYTES) == "image/png"
    
    def test_unknown_extension_sniffs(self):
        assert detect_content_type("https://x/avatar.unknownext", None, PNG_BYTES) == "image/png"


class TestFetchAvatar:
    def test_data_uri(self):
        response = FakeResponse(PNG_BYTES, {"Content-Type": "image/png"})
        with mock.patch("urllib.request.urlopen", return_value=response) as mock_urlopen:
            uri = fetch_avatar_data_uri("https://a.example.com/u/1")
        
        mock_urlopen.assert_called_once_with("https://a.example.com/u/1")
        assert uri == "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
    
    def test_sniffs_without_header(self):
        response = FakeResponse(PNG_BYTES)
        with mock.patch("urllib.request.urlopen", return_value=response):
            uri = fetch_avatar_data_uri("https://a.example.com/u/1")
        
        assert uri.startswith("data:image/png;base64,")
    
    def test_http_error(self):
        error = urllib.error.HTTPError(
            "https://a.example.com/u/1", 404, "Not Found", {}, io.BytesIO(b"missing")
        )
        with mock.patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(AvatarFetchError, match="failed to download avatar"):
                fetch_avatar_data_uri("https://a.example.com/u/1")
    
    def test_connection_error(self):
        with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            with pytest.raises(AvatarFetchError):
                fetch_avatar_data_uri("https://a.example.com/u/1")
    
    def test_read_error(self):
        response = mock.MagicMock()
        response.__enter__.return_value = response
        response.read.side_effect = ConnectionResetError("reset")
        with mock.patch("urllib.request.urlopen", return_value=response):
            with pytest.raises(AvatarFetchError, match="failed to read avatar data"):
                fetch_avatar_data_uri("https://a.example.com/u/1")
