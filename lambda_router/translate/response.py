"""Translate a canonical httpx.Response into the Lambda result shape."""

import base64

import httpx

from lambda_router.errors import TranslationError
from lambda_router.events.models import ProxyResult
from lambda_router.translate.binary import is_binary_type


async def send_response(response: httpx.Response) -> ProxyResult:
    """Read the response fully and build the API Gateway result.

    Set-Cookie headers leave the header map and travel in ``cookies``, the
    only place API Gateway looks for them in payload v2.

    Raises:
        TranslationError: The response body could not be read.
    """
    cookies: list[str] = []
    headers: dict[str, str] = {}
    for name, value in response.headers.multi_items():
        if name.lower() == "set-cookie":
            cookies.append(value)
        elif name in headers:
            headers[name] = f"{headers[name]}, {value}"
        else:
            headers[name] = value

    is_base64_encoded = is_binary_type(response.headers.get("content-type"))

    try:
        content = await response.aread()
    except (httpx.HTTPError, httpx.StreamError, OSError) as e:
        raise TranslationError(f"Cannot read response body: {e}") from e

    body: str | None = None
    if content:
        if is_base64_encoded:
            body = base64.b64encode(content).decode("ascii")
        else:
            body = response.text

    return ProxyResult(
        status_code=response.status_code,
        headers=headers,
        cookies=cookies,
        body=body,
        is_base64_encoded=is_base64_encoded,
    )
