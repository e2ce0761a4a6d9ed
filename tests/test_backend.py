"""Tests for the core backend module."""

import httpx

from longcat_proxy.config_loader import GatewaySettings
from longcat_proxy.core.backend import (
    BROWSER_HEADERS,
    build_upstream_headers,
    format_httpx_error,
    safe_headers_for_log,
)


class TestSafeHeadersForLog:
    """Tests for credential masking in logged headers."""

    def test_masks_long_credentials(self):
        headers = {"Cookie": "session=abcdef123456", "accept": "text/event-stream"}
        masked = safe_headers_for_log(headers)
        assert masked["Cookie"] == "sess****3456"
        assert masked["accept"] == "text/event-stream"

    def test_masks_short_and_empty_values(self):
        masked = safe_headers_for_log({"m-appkey": "abc", "m-traceid": ""})
        assert masked == {"m-appkey": "****", "m-traceid": ""}

    def test_does_not_modify_input(self):
        headers = {"authorization": "Bearer sk-1234567890"}
        safe_headers_for_log(headers)
        assert headers["authorization"] == "Bearer sk-1234567890"


def test_upstream_headers_carry_credentials_and_fingerprint():
    settings = GatewaySettings(cookie="c=1", app_key="ak", trace_id="tr")
    headers = build_upstream_headers(settings)
    for key, value in BROWSER_HEADERS.items():
        assert headers[key] == value
    assert headers["cookie"] == "c=1"
    assert headers["m-appkey"] == "ak"
    assert headers["m-traceid"] == "tr"


class TestFormatHttpxError:
    """Tests for error descriptions."""

    def test_includes_request(self):
        request = httpx.Request("POST", "https://longcat.chat/api")
        exc = httpx.ConnectError("connection refused", request=request)
        text = format_httpx_error(exc)
        assert text.startswith("ConnectError; connection refused")
        assert "request=POST https://longcat.chat/api" in text

    def test_falls_back_to_url_and_timeout(self):
        exc = httpx.ReadTimeout("timed out")
        text = format_httpx_error(exc, "https://longcat.chat/api", 30.0)
        assert "url=https://longcat.chat/api" in text
        assert "timeout=30.0s" in text

    def test_plain_exception(self):
        assert format_httpx_error(ValueError()) == "ValueError"
