"""Request-scoped context propagation."""

from src.context.propagator import ContextNotActiveError, ContextPropagator
from src.context.user_context import (
    UserContext,
    get_user_context,
    require_user,
    set_user,
    user_context,
)

__all__ = [
    "ContextNotActiveError",
    "ContextPropagator",
    "UserContext",
    "get_user_context",
    "require_user",
    "set_user",
    "user_context",
]
