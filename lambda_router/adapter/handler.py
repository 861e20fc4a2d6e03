"""Framework adapter — run a web framework as a route handler.

The framework is any async callable taking an httpx.Request and returning
an httpx.Response. ASGI applications (FastAPI, Starlette) are wrapped with
``asgi_framework``.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from lambda_router.config.settings import get_settings
from lambda_router.events.models import HttpEvent, ProxyResult
from lambda_router.routing.context import RequestContext
from lambda_router.routing.table import RouteHandler
from lambda_router.translate.request import create_request
from lambda_router.translate.response import send_response

Framework = Callable[[httpx.Request], Awaitable[httpx.Response]]
GetLoadContext = Callable[[HttpEvent, RequestContext], Any]


def create_request_handler(
    framework: Framework,
    *,
    get_load_context: GetLoadContext | None = None,
    mode: str | None = None,
    sandbox: bool | None = None,
) -> RouteHandler:
    """Build a route handler that forwards every event to ``framework``.

    Args:
        framework: Async ``(httpx.Request) -> httpx.Response`` callable.
        get_load_context: Builds per-request data for the framework from the
            event and context. Exposed as ``request.extensions["load_context"]``.
        mode: Runtime mode handed to the framework unchanged as
            ``request.extensions["mode"]``. Defaults to ``Settings.runtime_mode``.
        sandbox: Plain-http URLs. Defaults to ``Settings.arc_sandbox``.

    Usually registered as the catch-all: ``router.all(create_request_handler(...))``.
    """
    if mode is None:
        mode = get_settings().runtime_mode

    async def handle(event: HttpEvent, context: RequestContext) -> ProxyResult:
        request = create_request(event, sandbox=sandbox)
        request.extensions["mode"] = mode
        request.extensions["load_context"] = (
            get_load_context(event, context) if get_load_context else None
        )

        response = await framework(request)
        return await send_response(response)

    return handle


def asgi_framework(app: Any, root_path: str = "") -> Framework:
    """Wrap an ASGI application as a framework callable.

    Load context and mode are not visible to the ASGI app; httpx builds the
    ASGI scope from the URL, method, headers and body only.
    """
    transport = httpx.ASGITransport(app=app, root_path=root_path)

    async def call(request: httpx.Request) -> httpx.Response:
        return await transport.handle_async_request(request)

    return call
