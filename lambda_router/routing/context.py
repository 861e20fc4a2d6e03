"""Per-invocation context shared by middleware and handlers."""

from typing import Any


class RequestContext:
    """Lambda context plus mutable per-invocation state.

    Middleware attach derived values (principal, trace id) to ``state`` and
    later stages read them back, either from ``state`` or as attributes.
    Attribute reads check ``state`` first, so a value stored there shadows a
    Lambda context attribute of the same name.
    """

    def __init__(self, lambda_context: Any = None):
        self.lambda_context = lambda_context
        self.state: dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        # Only called for names not found on the instance itself
        state = self.__dict__.get("state", {})
        if name in state:
            return state[name]
        lambda_context = self.__dict__.get("lambda_context")
        if lambda_context is not None:
            return getattr(lambda_context, name)
        raise AttributeError(name)

    def __repr__(self) -> str:
        return f"RequestContext(state={self.state!r})"
