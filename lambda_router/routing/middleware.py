"""Sequential middleware pipeline.

A middleware is ``async def mw(event, context, next)``. It must call
``next()`` exactly once: with no argument to let the pipeline continue, or
with a result to stop it and answer the invocation directly. A middleware
that never calls ``next`` stalls the invocation; only the Lambda timeout
ends it. Calling ``next`` releases the pipeline at once, even if the
middleware keeps running afterwards.
"""

import asyncio
import inspect
from collections.abc import Callable, Sequence
from functools import partial
from typing import Any

from lambda_router.events.models import HttpEvent, ProxyResult
from lambda_router.logging.audit import get_logger
from lambda_router.routing.context import RequestContext

Next = Callable[..., None]
Middleware = Callable[[HttpEvent, RequestContext, Next], Any]

logger = get_logger("middleware")

# Middleware still running after calling next()
_pending: set[asyncio.Future] = set()


async def run_middleware(
    middleware: Sequence[Middleware], event: HttpEvent, context: RequestContext
) -> ProxyResult | None:
    """Run middleware in order; return the first short-circuit result, if any."""
    for mw in middleware:
        result = await _run_one(mw, event, context)
        if result is not None:
            return result
    return None


async def _run_one(mw: Middleware, event: HttpEvent, context: RequestContext) -> ProxyResult | None:
    completed: asyncio.Future = asyncio.get_running_loop().create_future()

    def next_(result: Any = None) -> None:
        if completed.done():
            logger.warning(
                "Middleware called next() more than once",
                extra={"audit_data": {"middleware": getattr(mw, "__name__", repr(mw))}},
            )
            return
        completed.set_result(result)

    returned = mw(event, context, next_)
    if inspect.isawaitable(returned):
        task = asyncio.ensure_future(returned)
        _pending.add(task)
        task.add_done_callback(_pending.discard)
        await asyncio.wait({task, completed}, return_when=asyncio.FIRST_COMPLETED)
        if completed.done():
            # next() is the gate; work after it continues in the background
            task.add_done_callback(partial(_log_late_failure, mw))
        else:
            # Finished without signalling: re-raise its failure, or stall
            task.result()

    result = await completed
    if result is None:
        return None
    return ProxyResult.from_value(result)


def _log_late_failure(mw: Middleware, task: asyncio.Future) -> None:
    if task.cancelled() or task.exception() is None:
        return
    logger.error(
        "Middleware failed after calling next()",
        exc_info=task.exception(),
        extra={"audit_data": {"middleware": getattr(mw, "__name__", repr(mw))}},
    )
