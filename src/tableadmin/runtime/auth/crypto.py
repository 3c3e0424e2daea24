"""Password hashing, verification, and cookie security helpers."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Any

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password with salt using PBKDF2-SHA256 (100k iterations)."""
    if salt is None:
        salt = secrets.token_hex(16)

    key = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        PBKDF2_ITERATIONS,
    )

    return f"{salt}${key.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash (constant-time comparison)."""
    try:
        salt, _ = password_hash.split("$")
        return hmac.compare_digest(hash_password(password, salt), password_hash)
    except ValueError:
        return False


def cookie_secure(request: Any, force: bool = False) -> bool:
    """Determine the cookie Secure flag.

    ``force`` comes from ``AdminConfig.secure_cookies``; otherwise the flag
    follows the request scheme, which Starlette derives from
    ``X-Forwarded-Proto`` when running behind a trusted proxy.
    """
    if force:
        return True
    if hasattr(request, "url"):
        return str(getattr(request.url, "scheme", "http")) == "https"
    return False
