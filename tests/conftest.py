import os
import time
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import patch

import pytest
from authlib.jose import jwt

from src.config import get_config
from tests.mocks import MockUUID

TEST_JWT_SECRET = "test-secret-key-with-enough-entropy"


def pytest_configure(config):
    """
    Loads .env and sets the environment variables the app needs at import time.
    """
    from dotenv import load_dotenv

    load_dotenv()
    os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)
    os.environ.setdefault("USE_AUTH", "true")
    os.environ.setdefault("CORS_ALLOWED_ORIGINS", "")
    get_config.cache_clear()


@pytest.fixture
def mock_uuid() -> Iterator[MockUUID]:
    """Makes every generated id deterministic."""
    double = MockUUID()
    with patch("src.utils.ids.uuid", double):
        yield double


@pytest.fixture(scope="session")
def jwt_secret() -> str:
    return get_config().jwt_secret.get_secret_value()


@pytest.fixture
def make_token(jwt_secret: str) -> Callable[..., str]:
    """Returns a helper that signs an HS256 token with the configured secret."""

    def _make_token(
        sub: str | None = "user-1",
        email: str = "user@example.com",
        roles: list[str] | None = None,
        expires_in: int = 300,
        secret: str | None = None,
        **extra_claims: Any,
    ) -> str:
        now = int(time.time())
        payload: dict[str, Any] = {
            "email": email,
            "roles": ["EMPLOYEE"] if roles is None else roles,
            "iat": now,
            "exp": now + expires_in,
            **extra_claims,
        }
        if sub is not None:
            payload["sub"] = sub
        token = jwt.encode({"alg": "HS256"}, payload, secret or jwt_secret)
        return token.decode("utf-8")

    return _make_token
