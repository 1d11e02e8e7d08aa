import hashlib
import time
from typing import Any

import structlog
from authlib.jose import JoseError, JsonWebToken
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from src.config import get_config
from src.context.user_context import UserContext, set_user
from src.utils.logging import get_logger

logger = get_logger(__name__)

# Constants
TOKEN_VALIDATION_ALERT_MS = 50

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class AuthError(Exception):
    """Bearer token could not be accepted."""

    def __init__(self, error: str, description: str, status_code: int):
        self.error = error
        self.description = description
        self.status_code = status_code
        super().__init__(f"{error}: {description}")


def validate_token(token: str, token_hash: str, secret: bytes, algorithm: str) -> UserContext:
    """Decodes and validates an HMAC-signed JWT, returning the identity it carries."""
    start_time = time.monotonic()
    jwt = JsonWebToken([algorithm])

    try:
        claims = jwt.decode(
            token,
            secret,
            claims_options={
                "sub": {"essential": True},
                "exp": {"essential": True},
            },
        )
        claims.validate()
    except JoseError as e:
        logger.warning("auth_jwt_validation_failed", token_hash=token_hash[:8], error=str(e))
        raise AuthError("invalid_token", f"Token validation failed: {e}", 401) from e
    except Exception as e:
        logger.error("auth_jwt_unexpected_error", exc_info=e, token_hash=token_hash[:8])
        raise AuthError(
            "server_error", "An unexpected error occurred during token validation", 500
        ) from e

    roles: Any = claims.get("roles") or []
    if isinstance(roles, str):
        roles = roles.split()

    try:
        user = UserContext(
            id=str(claims["sub"]),
            email=claims.get("email") or "",
            roles=roles,
        )
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        logger.warning("auth_claims_malformed", token_hash=token_hash[:8], fields=fields)
        raise AuthError(
            "invalid_token", f"Token claims are malformed: {', '.join(fields)}", 401
        ) from e

    validation_duration_ms = (time.monotonic() - start_time) * 1000
    logger.info(
        "auth_token_validated",
        token_hash=token_hash[:8],
        user_id=user.id,
        duration_ms=round(validation_duration_ms, 2),
    )

    if validation_duration_ms > TOKEN_VALIDATION_ALERT_MS:
        logger.warning(
            "auth_validation_performance_alert",
            duration_ms=round(validation_duration_ms, 2),
            threshold_ms=TOKEN_VALIDATION_ALERT_MS,
        )

    return user


def _build_auth_error_response_json(
    error: str, description: str, status_code: int = 401
) -> JSONResponse:
    """Builds an RFC 6750 style error JSONResponse."""
    content = {"error": error, "error_description": description}
    headers = {"WWW-Authenticate": f'Bearer error="{error}", error_description="{description}"'}
    return JSONResponse(content=content, status_code=status_code, headers=headers)


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Bearer token validation that fills in the request's UserContext.

    Runs inside ContextMiddleware's extent; the identity is merged into the store
    that middleware bound, so route handlers read it through get_user_context().
    """

    def __init__(self, app: ASGIApp, exclude_paths: list[str] | None = None) -> None:
        super().__init__(app)
        self.exclude_paths = set(exclude_paths or [])
        self.config = get_config()

        if self.config.jwt_secret is None:
            raise ValueError("JWT_SECRET must be configured when authentication is enabled.")

        self.secret = self.config.jwt_secret.get_secret_value().encode()
        self.algorithm = self.config.jwt_algorithm

        logger.info(
            "auth_middleware_initialized",
            algorithm=self.algorithm,
            exclude_paths=sorted(self.exclude_paths),
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        authorization_header = request.headers.get("authorization")
        if not authorization_header:
            return _build_auth_error_response_json(
                "invalid_request", "Authorization header is missing", 401
            )

        if not authorization_header.startswith("Bearer "):
            return _build_auth_error_response_json(
                "invalid_request", "Authorization header must be in 'Bearer <token>' format", 401
            )

        bearer_token = authorization_header[7:]
        token_hash = hashlib.sha256(bearer_token.encode()).hexdigest()

        try:
            user = validate_token(bearer_token, token_hash, self.secret, self.algorithm)
        except AuthError as e:
            return _build_auth_error_response_json(e.error, e.description, e.status_code)

        if not set_user(user):
            logger.warning("auth_without_request_context", path=request.url.path)
        request.state.user = user

        with structlog.contextvars.bound_contextvars(user_id=user.id):
            response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response
