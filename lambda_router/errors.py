"""Exceptions raised by the router and its translators."""


class RouterError(Exception):
    """Base class for lambda_router errors."""


class TranslationError(RouterError):
    """An event or response could not be translated.

    Raised for malformed base64 request bodies, unusable request URLs, and
    response bodies that fail to read.
    The underlying exception is chained as ``__cause__``.
    """
