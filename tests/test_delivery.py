"""Tests for webhook delivery."""

import http.client
import io
import json
import urllib.error
from unittest import mock

from teams_notifier.delivery import send_card

WEBHOOK = "https://outlook.example.com/webhook/abc"


class FakeResponse:
    def __init__(self, status: int, body: bytes = b"1"):
        self.status = status
        self._body = body
    
    def read(self):
        return self._body
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc, tb):
        return False


class TestSendCard:
    def test_success(self):
        payload = json.dumps({"type": "message"}).encode()
        with mock.patch("urllib.request.urlopen", return_value=FakeResponse(200)) as mock_urlopen:
            result = send_card(WEBHOOK, payload)
        
        assert result.success is True
        assert result.status_code == 200
        
        request = mock_urlopen.call_args[0][0]
        assert request.full_url == WEBHOOK
        assert request.get_method() == "POST"
        assert request.data == payload
        assert request.get_header("Content-type") == "application/json"
    
    def test_non_200_success_status_is_failure(self):
        with mock.patch("urllib.request.urlopen", return_value=FakeResponse(202, b"accepted")):
            result = send_card(WEBHOOK, b"{}")
        
        assert result.success is False
        assert result.status_code == 202
        assert result.body == "accepted"
    
    def test_http_error_body_is_captured(self):
        error = urllib.error.HTTPError(WEBHOOK, 400, "Bad Request", {}, io.BytesIO(b"Bad payload"))
        with mock.patch("urllib.request.urlopen", side_effect=error):
            result = send_card(WEBHOOK, b"{}")
        
        assert result.success is False
        assert result.status_code == 400
        assert result.body == "Bad payload"
        assert result.error == ""
    
    def test_transport_error(self):
        with mock.patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            result = send_card(WEBHOOK, b"{}")
        
        assert result.success is False
        assert result.status_code is None
        assert "refused" in result.error
    
    def test_unreadable_error_body_is_still_a_failure(self):
        error = urllib.error.HTTPError(WEBHOOK, 500, "Server Error", {}, io.BytesIO(b""))
        error.read = mock.Mock(side_effect=http.client.IncompleteRead(b"partial"))
        with mock.patch("urllib.request.urlopen", side_effect=error):
            result = send_card(WEBHOOK, b"{}")
        
        assert result.success is False
        assert result.status_code == 500
        assert result.body == ""
