"""Per-request user identity store, bound by ContextMiddleware and filled in by AuthMiddleware."""

from pydantic import BaseModel, ConfigDict, Field

from src.context.propagator import ContextPropagator
from src.models.errors import AuthenticationError
from src.utils.logging import get_logger

logger = get_logger(__name__)

# Fields copied by set_user; request_id belongs to the request, not the identity.
_IDENTITY_FIELDS = ("id", "email", "roles")


class UserContext(BaseModel):
    """
    Identity of the caller for the current request.
    Starts empty and is populated in place once the bearer token is validated.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field("", description="Subject identifier of the authenticated user")
    email: str = Field("", description="Email address of the authenticated user")
    roles: list[str] = Field(default_factory=list, description="Role names granted to the user")
    request_id: str | None = Field(None, description="Correlation id of the current request")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.id)


user_context: ContextPropagator[UserContext] = ContextPropagator("user_context")


def get_user_context() -> UserContext | None:
    """Return the user context of the current request, or None outside a request."""
    return user_context.get_current()


def set_user(user: UserContext) -> bool:
    """
    Merge the identity fields of ``user`` into the active store.

    The store is mutated rather than rebound, so code holding a reference to it
    (including code running in tasks spawned before this call) sees the update.
    Returns False, without raising, when no request context is active.
    """
    store = user_context.get_current()
    if store is None:
        logger.warning("user_context_not_active", user_id=user.id)
        return False

    for name in _IDENTITY_FIELDS:
        setattr(store, name, getattr(user, name))
    return True


async def require_user() -> UserContext:
    """
    FastAPI dependency returning the authenticated user of the current request.

    Raises AuthenticationError, which the app's exception handlers render as a
    401 ErrorDetail carrying the request id.
    """
    store = user_context.get_current()
    if store is None or not store.is_authenticated:
        raise AuthenticationError("Not authenticated")
    return store
