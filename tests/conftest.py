"""Shared fixtures for the lambda_router test suite."""

import base64
import logging
from types import SimpleNamespace

import pytest

from lambda_router.config.settings import get_settings
from lambda_router.logging.audit import LOGGER_NAME


def make_event(
    method: str = "GET",
    path: str = "/",
    query: str = "",
    headers: dict | None = None,
    cookies: list[str] | None = None,
    body: str | bytes | None = None,
    base64_body: bool = False,
) -> dict:
    """Build an API Gateway HTTP API (v2) event mapping."""
    if base64_body and body is not None:
        raw = body.encode() if isinstance(body, str) else body
        body = base64.b64encode(raw).decode("ascii")
    event = {
        "version": "2.0",
        "routeKey": "$default",
        "rawPath": path,
        "rawQueryString": query,
        "headers": {"host": "example.com"} if headers is None else headers,
        "requestContext": {"http": {"method": method, "path": path}},
        "isBase64Encoded": base64_body,
    }
    if cookies is not None:
        event["cookies"] = cookies
    if body is not None:
        event["body"] = body
    return event


@pytest.fixture
def lambda_context():
    """Stand-in for the Lambda runtime's context object."""
    return SimpleNamespace(
        aws_request_id="req-lambda-123",
        function_name="router-test",
        memory_limit_in_mb=128,
    )


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(ARC_SANDBOX="true", RUNTIME_MODE="development")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        # Clear lru_cache so Settings re-reads env
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to a previous test's captured stdout."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
