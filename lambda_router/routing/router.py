"""Lambda router: registration API, dispatcher and Lambda entry point.

    router = LambdaRouter()

    @router.use
    async def auth(event, context, next):
        context.state["user"] = ...
        next()

    @router.get("/health")
    async def health(event, context):
        return {"statusCode": 200, "body": "ok"}

    handler = router.build()

Dispatch runs in two phases: every middleware in registration order, then
a single exact-path lookup. Routes and middleware are meant to be
registered once at import time; the built handler reads the live table, so
registering while invocations are in flight is not safe.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

from lambda_router.events.models import HttpEvent, ProxyResult, not_found
from lambda_router.logging.audit import (
    RequestTimer,
    generate_request_id,
    get_logger,
    request_id_var,
    setup_logging,
)
from lambda_router.routing.context import RequestContext
from lambda_router.routing.middleware import Middleware, run_middleware
from lambda_router.routing.table import RouteHandler, RouteTable


class LambdaRouter:
    """Collects routes and middleware, then builds a Lambda handler."""

    def __init__(self):
        self.routes = RouteTable()
        self.middleware: list[Middleware] = []

    def get(self, path: str, handler: RouteHandler | None = None):
        return self._register("GET", path, handler)

    def post(self, path: str, handler: RouteHandler | None = None):
        return self._register("POST", path, handler)

    def all(self, handler: RouteHandler | None = None):
        """Set the catch-all handler. A second call replaces the first."""
        if handler is None:
            def decorator(fn: RouteHandler) -> RouteHandler:
                self.routes.register_catch_all(fn)
                return fn
            return decorator
        self.routes.register_catch_all(handler)
        return handler

    def use(self, middleware: Middleware) -> Middleware:
        self.middleware.append(middleware)
        return middleware

    def lookup(self, method: str, path: str) -> RouteHandler | None:
        return self.routes.lookup(method, path)

    def build(self, configure_logging: bool = True) -> "LambdaHandler":
        if configure_logging:
            setup_logging()
        return LambdaHandler(self.routes, self.middleware)

    def _register(self, method: str, path: str, handler: RouteHandler | None):
        if handler is None:
            def decorator(fn: RouteHandler) -> RouteHandler:
                self.routes.register(method, path, fn)
                return fn
            return decorator
        self.routes.register(method, path, handler)
        return handler


class LambdaHandler:
    """The built router.

    ``dispatch`` is the async core. Calling the instance is the synchronous
    entry point the Lambda Python runtime invokes.
    """

    def __init__(self, routes: RouteTable, middleware: list[Middleware]):
        self.routes = routes
        self.middleware = middleware
        self.logger = get_logger("handler")

    async def dispatch(
        self, event: HttpEvent | Mapping[str, Any], context: Any = None
    ) -> ProxyResult:
        """Route one event to exactly one result.

        Routing misses produce a 404 result. Handler and middleware
        exceptions propagate unchanged.
        """
        if not isinstance(event, HttpEvent):
            event = HttpEvent.from_dict(event)
        if not isinstance(context, RequestContext):
            context = RequestContext(context)

        result = await run_middleware(self.middleware, event, context)
        if result is not None:
            return result

        entry = self.routes.entry(event.raw_path)
        if entry is None:
            handler = self.routes.catch_all()
        else:
            # A known path never falls through to the catch-all
            handler = entry.for_method(event.method.upper())

        if handler is None:
            return not_found()

        return ProxyResult.from_value(await handler(event, context))

    def __call__(self, event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        rid = getattr(context, "aws_request_id", None) or generate_request_id()
        token = request_id_var.set(rid)
        try:
            http_event = HttpEvent.from_dict(event)
            log_data = {"method": http_event.method, "path": http_event.raw_path}

            with RequestTimer() as timer:
                try:
                    result = asyncio.run(self.dispatch(http_event, context))
                except Exception:
                    self.logger.exception(
                        "Invocation failed",
                        extra={"audit_data": log_data},
                    )
                    raise

            self.logger.info(
                "Request routed",
                extra={"audit_data": {
                    **log_data,
                    "status": result.status_code,
                    "latency_ms": timer.elapsed_ms,
                }},
            )
            return result.to_dict()
        finally:
            request_id_var.reset(token)
