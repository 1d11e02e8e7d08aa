"""
Main ASGI Server.

Every request runs inside its own UserContext extent, bound by ContextMiddleware
before any other middleware or route logic executes.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import Config, get_config
from src.context.user_context import UserContext, require_user
from src.handlers.errors import register_exception_handlers
from src.handlers.health import VERSION, health_check
from src.middleware.auth import AuthMiddleware
from src.middleware.context import ContextMiddleware
from src.utils.logging import get_logger

logger = get_logger(__name__)

AUTH_EXCLUDE_PATHS = ["/health", "/docs", "/redoc", "/openapi.json"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan (startup and shutdown)."""
    config = get_config()
    logger.info("server_starting", version=VERSION)
    logger.info(
        "configuration_loaded",
        environment=config.environment,
        log_level=config.log_level,
        use_auth=config.use_auth,
    )
    yield
    logger.info("server_stopping")


async def health() -> JSONResponse:
    """Health check endpoint."""
    return await health_check()


async def current_context(user: UserContext = Depends(require_user)) -> UserContext:
    """Return the identity bound to the current request."""
    return user


def create_app(config: Config | None = None) -> FastAPI:
    config = config or get_config()

    app = FastAPI(
        title="Request Context Service",
        description="Binds a per-request user context to every request it serves.",
        version=VERSION,
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route("/context", current_context, methods=["GET"], response_model=UserContext)

    # Starlette wraps middleware in reverse order of registration: the last one added
    # runs first, so ContextMiddleware goes in last.
    if config.allowed_origins:
        logger.info("cors_enabled", allowed_origins=config.allowed_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[config.request_id_header],
        )

    if config.use_auth:
        app.add_middleware(AuthMiddleware, exclude_paths=AUTH_EXCLUDE_PATHS)
    else:
        logger.warning("auth_disabled", detail="This is not safe for production.")

    app.add_middleware(
        ContextMiddleware,
        request_id_header=config.request_id_header,
        trust_request_id_header=config.trust_request_id_header,
    )
    return app


app = create_app()
