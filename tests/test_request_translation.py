"""Tests for lambda_router/translate/request.py — event to httpx.Request."""

import asyncio
import base64

import httpx
import pytest

from lambda_router.errors import TranslationError
from lambda_router.events.models import HttpEvent
from lambda_router.translate.binary import is_binary_type
from lambda_router.translate.request import create_headers, create_request
from tests.conftest import make_event

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def _event(**kwargs) -> HttpEvent:
    return HttpEvent.from_dict(make_event(**kwargs))


class TestURL:

    def test_https_by_default(self):
        request = create_request(_event(path="/cool"), sandbox=False)
        assert str(request.url) == "https://example.com/cool"

    def test_sandbox_uses_http(self):
        request = create_request(_event(path="/cool"), sandbox=True)
        assert request.url.scheme == "http"

    def test_sandbox_defaults_from_settings(self, override_settings):
        override_settings(ARC_SANDBOX="true")
        request = create_request(_event(path="/"))
        assert request.url.scheme == "http"

    def test_query_string_appended(self):
        request = create_request(_event(path="/search", query="q=lambda&page=2"), sandbox=False)
        assert str(request.url) == "https://example.com/search?q=lambda&page=2"

    def test_empty_query_string(self):
        request = create_request(_event(path="/search"), sandbox=False)
        assert "?" not in str(request.url)

    def test_forwarded_host_wins(self):
        event = _event(headers={"host": "internal.aws", "x-forwarded-host": "www.example.org"})
        request = create_request(event, sandbox=False)
        assert request.url.host == "www.example.org"

    def test_missing_host(self):
        request = create_request(_event(headers={}), sandbox=False)
        assert request.url.host == "localhost"

    def test_method(self):
        request = create_request(_event(method="post"), sandbox=False)
        assert request.method == "POST"


class TestHeaders:

    def test_copies_headers(self):
        headers = create_headers({"accept": "text/html", "x-trace": "abc"})
        assert headers["accept"] == "text/html"
        assert headers["x-trace"] == "abc"

    def test_skips_empty_values(self):
        headers = create_headers({"accept": "", "x-none": None, "x-ok": "1"})
        assert "accept" not in headers
        assert "x-none" not in headers
        assert headers["x-ok"] == "1"

    def test_non_ascii_value(self):
        headers = create_headers({"x-name": "café"})
        assert headers["x-name"] == "café"

    def test_request_with_non_ascii_header(self):
        event = HttpEvent(
            method="GET", raw_path="/", headers={"host": "example.com", "x-name": "café"},
        )
        request = create_request(event, sandbox=False)
        assert request.headers["x-name"] == "café"
        assert (b"x-name", "café".encode("utf-8")) in request.headers.raw

    def test_cookies_folded(self):
        headers = create_headers({}, ["session=abc", "theme=dark"])
        assert headers["cookie"] == "session=abc; theme=dark"

    def test_no_cookie_header_without_cookies(self):
        assert "cookie" not in create_headers({"host": "x"}, None)

    def test_request_carries_cookie_header(self):
        request = create_request(_event(cookies=["a=1", "b=2"]), sandbox=False)
        assert request.headers["cookie"] == "a=1; b=2"


class TestBody:

    def test_absent_body_is_empty(self):
        request = create_request(_event(), sandbox=False)
        assert request.content == b""

    def test_plain_body_passthrough(self):
        request = create_request(_event(method="POST", body='{"a": 1}'), sandbox=False)
        assert request.content == b'{"a": 1}'

    def test_base64_text_body_decoded(self):
        event = _event(method="POST", body="hello world", base64_body=True)
        request = create_request(event, sandbox=False)
        assert request.content == b"hello world"

    def test_base64_form_data_kept_as_bytes(self):
        raw = b"--boundary\r\n\xff\xfe binary part\r\n--boundary--"
        event = _event(
            method="POST",
            headers={"host": "example.com", "content-type": "multipart/form-data; boundary=boundary"},
            body=raw,
            base64_body=True,
        )
        request = create_request(event, sandbox=False)
        assert request.content == raw

    def test_binary_content_type_survives(self):
        event = _event(
            method="POST",
            headers={"host": "example.com", "content-type": "image/png"},
            body=PNG_BYTES,
            base64_body=True,
        )
        request = create_request(event, sandbox=False)
        assert is_binary_type(request.headers["content-type"])

    def test_invalid_utf8_replaced(self):
        event = _event(method="POST", body=b"ok \xff", base64_body=True)
        request = create_request(event, sandbox=False)
        assert request.content == "ok \ufffd".encode()

    def test_malformed_base64(self):
        event = HttpEvent(
            method="POST", raw_path="/", headers={"host": "example.com"},
            body="not*base64!", is_base64_encoded=True,
        )
        with pytest.raises(TranslationError) as exc_info:
            create_request(event, sandbox=False)
        assert exc_info.value.__cause__ is not None


class TestAbortSignal:

    def test_signal_attached(self):
        request = create_request(_event(), sandbox=False)
        signal = request.extensions["abort_signal"]
        assert isinstance(signal, asyncio.Event)
        assert not signal.is_set()

    def test_fresh_signal_per_request(self):
        a = create_request(_event(), sandbox=False)
        b = create_request(_event(), sandbox=False)
        assert a.extensions["abort_signal"] is not b.extensions["abort_signal"]


def test_returns_httpx_request():
    assert isinstance(create_request(_event(), sandbox=False), httpx.Request)
