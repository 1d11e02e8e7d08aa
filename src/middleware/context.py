from collections.abc import Callable

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.config import get_config
from src.context.user_context import UserContext, user_context
from src.utils.ids import new_request_id
from src.utils.logging import get_logger

logger = get_logger(__name__)

InitialContextFactory = Callable[[Scope, str], UserContext]

MAX_REQUEST_ID_LENGTH = 64


def empty_user_context(scope: Scope, request_id: str) -> UserContext:
    """Default initial value: no identity yet, only the correlation id."""
    return UserContext(request_id=request_id)


class ContextMiddleware:
    """
    Binds a fresh UserContext for the whole downstream pipeline of each request.

    Must be the outermost middleware so that everything after it, including other
    middleware, route dependencies and handlers, runs inside the same extent.
    """

    def __init__(
        self,
        app: ASGIApp,
        initial_context_factory: InitialContextFactory | None = None,
        request_id_header: str | None = None,
        trust_request_id_header: bool | None = None,
    ) -> None:
        self.app = app
        config = get_config()
        self.initial_context_factory = initial_context_factory or empty_user_context
        self.request_id_header = request_id_header or config.request_id_header
        self.trust_request_id_header = (
            config.trust_request_id_header
            if trust_request_id_header is None
            else trust_request_id_header
        )

    def _resolve_request_id(self, scope: Scope) -> str:
        if self.trust_request_id_header:
            inbound = Headers(scope=scope).get(self.request_id_header, "").strip()
            if self._is_valid_request_id(inbound):
                return inbound
            if inbound:
                logger.debug("request_id_header_rejected", length=len(inbound))
        return new_request_id()

    @staticmethod
    def _is_valid_request_id(request_id: str) -> bool:
        if not request_id or len(request_id) > MAX_REQUEST_ID_LENGTH:
            return False
        return all((c.isascii() and c.isalnum()) or c in "-_" for c in request_id)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        request_id = self._resolve_request_id(scope)
        initial = self.initial_context_factory(scope, request_id)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers[self.request_id_header] = request_id
            await send(message)

        with user_context.scope(initial), structlog.contextvars.bound_contextvars(
            request_id=request_id
        ):
            logger.debug("request_context_bound", path=scope.get("path"))
            await self.app(scope, receive, send_with_request_id)
