"""
Signed tokens for admin sessions and CSRF protection.

Both token kinds are HS256 JWTs signed with the configured session secret.
A ``purpose`` claim keeps them apart: a CSRF token is never accepted as a
session token, and vice versa. There is no revocation list; rotating the
secret invalidates every outstanding token.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

import jwt
from pydantic import BaseModel, ConfigDict, Field

from tableadmin.errors import ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_TOKEN_TTL = timedelta(hours=24)
CSRF_TOKEN_TTL = timedelta(hours=1)

# Minimum secret key length for HMAC signing (256 bits)
MIN_SECRET_LENGTH = 32

# Maximum token length accepted for verification
MAX_TOKEN_LENGTH = 16 * 1024

CSRF_SUBJECT = "0"
CSRF_EMAIL = "csrf"


class TokenPurpose(StrEnum):
    """What a token may be used for."""

    SESSION = "session"
    CSRF = "csrf"


class TokenClaims(BaseModel):
    """Claims carried by a verified token."""

    model_config = ConfigDict(frozen=True)

    sub: str = Field(description="Subject (admin user id)")
    email: str = Field(description="Admin email")
    purpose: TokenPurpose = Field(description="Token purpose")
    iat: int = Field(description="Issued at timestamp")
    exp: int = Field(description="Expiration timestamp")

    @property
    def is_expired(self) -> bool:
        return datetime.now(UTC).timestamp() > self.exp


class TokenError(Exception):
    """A token failed verification."""

    def __init__(self, message: str, code: str = "invalid_token"):
        self.code = code
        super().__init__(message)


class TokenService:
    """Creates and verifies session and CSRF tokens."""

    def __init__(self, secret: str):
        if len(secret) < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"Session secret must be at least {MIN_SECRET_LENGTH} characters. "
                f"Got {len(secret)}."
            )
        self._secret = secret

    def create_token(
        self,
        subject_id: Any,
        email: str,
        purpose: TokenPurpose = TokenPurpose.SESSION,
        ttl: timedelta | None = None,
    ) -> str:
        """Sign a token for ``subject_id``; ``ttl`` defaults by purpose."""
        if ttl is None:
            ttl = SESSION_TOKEN_TTL if purpose == TokenPurpose.SESSION else CSRF_TOKEN_TTL
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "email": email,
            "purpose": purpose.value,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def create_session_token(self, subject_id: Any, email: str) -> str:
        return self.create_token(subject_id, email, TokenPurpose.SESSION)

    def create_csrf_token(self) -> str:
        return self.create_token(CSRF_SUBJECT, CSRF_EMAIL, TokenPurpose.CSRF)

    def verify_token(
        self, token: str, purpose: TokenPurpose = TokenPurpose.SESSION
    ) -> TokenClaims:
        """
        Verify signature, expiry and purpose.

        Raises:
            TokenError: if the token is malformed, forged, expired or was
                issued for a different purpose.
        """
        if len(token) > MAX_TOKEN_LENGTH:
            raise TokenError("Token exceeds maximum length", code="token_too_large")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "email", "purpose", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired", code="token_expired") from None
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}") from None

        if payload.get("purpose") != purpose.value:
            raise TokenError("Token was issued for another purpose", code="wrong_purpose")

        return TokenClaims(**payload)

    def decode(
        self, token: str | None, purpose: TokenPurpose = TokenPurpose.SESSION
    ) -> TokenClaims | None:
        """Like :meth:`verify_token` but returns ``None`` instead of raising."""
        if not token:
            return None
        try:
            return self.verify_token(token, purpose)
        except TokenError as e:
            logger.debug("Rejected %s token: %s", purpose.value, e.code)
            return None
