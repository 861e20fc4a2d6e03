"""Translate an API Gateway event into a canonical httpx.Request."""

import asyncio
import base64
import binascii
from collections.abc import Mapping

import httpx

from lambda_router.config.settings import get_settings
from lambda_router.errors import TranslationError
from lambda_router.events.models import HttpEvent

DEFAULT_HOST = "localhost"


def create_request(event: HttpEvent, *, sandbox: bool | None = None) -> httpx.Request:
    """Build the request a web framework would have received directly.

    Args:
        event: Parsed gateway event.
        sandbox: Serve over plain http. Defaults to ``Settings.arc_sandbox``.

    Raises:
        TranslationError: The body is not valid base64, or the
            URL cannot be built from the event.
    """
    if sandbox is None:
        sandbox = get_settings().arc_sandbox
    scheme = "http" if sandbox else "https"

    host = event.header("x-forwarded-host") or event.header("host") or DEFAULT_HOST
    search = f"?{event.raw_query_string}" if event.raw_query_string else ""

    try:
        url = httpx.URL(f"{scheme}://{host}{event.raw_path}{search}")
    except httpx.InvalidURL as e:
        raise TranslationError(f"Cannot build request URL: {e}") from e

    # Nothing aborts a Lambda invocation from the outside, but frameworks
    # expect a signal they can check for aborted requests
    abort_signal = asyncio.Event()

    return httpx.Request(
        event.method,
        url,
        headers=create_headers(event.headers, event.cookies),
        content=_decode_body(event),
        extensions={"abort_signal": abort_signal},
    )


def create_headers(headers: Mapping[str, str | None], cookies: list[str] | None = None) -> httpx.Headers:
    """Copy gateway headers, folding the cookie list back into one header."""
    items = [(name, value) for name, value in headers.items() if value]

    if cookies:
        items.append(("Cookie", "; ".join(cookies)))

    # API Gateway forwards header values as UTF-8, not just ASCII
    return httpx.Headers(items, encoding="utf-8")


def _decode_body(event: HttpEvent) -> str | bytes | None:
    if event.body is None or not event.is_base64_encoded:
        return event.body

    is_form_data = "multipart/form-data" in (event.header("content-type") or "")
    try:
        raw = base64.b64decode(event.body, validate=True)
    except binascii.Error as e:
        raise TranslationError(f"Cannot decode request body: {e}") from e

    # Invalid UTF-8 is replaced rather than rejected
    return raw if is_form_data else raw.decode("utf-8", errors="replace")
