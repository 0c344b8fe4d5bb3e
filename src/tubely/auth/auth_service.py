"""Bearer token issuance and validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as PyJWTInvalidTokenError
import structlog


logger = structlog.get_logger(__name__)

TOKEN_ISSUER = "tubely-access"


def _utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(tz=timezone.utc)


class AuthError(Exception):
    """Base class for auth failures."""


class InvalidTokenError(AuthError):
    """Raised when token cannot be decoded."""


class TokenExpiredError(AuthError):
    """Raised when token is expired."""


@dataclass(slots=True)
class AuthService:
    """Issue and validate HS256 access tokens carrying the user id."""

    signing_key: str
    token_ttl: timedelta = timedelta(hours=1)

    def __post_init__(self) -> None:
        if not self.signing_key:
            raise RuntimeError("JWT_SECRET is not configured")

    def issue_token(self, user_id: str, *, issued_at: datetime | None = None) -> str:
        now = issued_at or _utcnow()
        payload: dict[str, Any] = {
            "iss": TOKEN_ISSUER,
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self.token_ttl).timestamp()),
        }
        return jwt.encode(payload, self.signing_key, algorithm="HS256")

    def validate_token(self, token: str) -> str:
        """Decode JWT and return the caller's user id."""
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.signing_key,
                algorithms=["HS256"],
                issuer=TOKEN_ISSUER,
                options={"require": ["exp", "iat", "sub"]},
            )
        except ExpiredSignatureError as exc:
            logger.info("auth.token.expired")
            raise TokenExpiredError("Token expired") from exc
        except PyJWTInvalidTokenError as exc:
            logger.info("auth.token.invalid", error=str(exc))
            raise InvalidTokenError("Invalid token") from exc

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Token subject is missing")
        return user_id


__all__ = [
    "AuthError",
    "AuthService",
    "InvalidTokenError",
    "TokenExpiredError",
]
