"""Tests for session and CSRF token signing."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from tableadmin.errors import ConfigurationError
from tableadmin.runtime.auth.tokens import (
    MAX_TOKEN_LENGTH,
    MIN_SECRET_LENGTH,
    TokenError,
    TokenPurpose,
    TokenService,
)

SECRET = "s" * MIN_SECRET_LENGTH


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(SECRET)


class TestSecret:
    def test_short_secret_is_rejected(self):
        with pytest.raises(ConfigurationError, match="at least 32 characters"):
            TokenService("too-short")

    def test_minimum_length_is_accepted(self):
        TokenService("x" * MIN_SECRET_LENGTH)


# =============================================================================
# Session tokens
# =============================================================================


class TestSessionTokens:
    def test_round_trip(self, tokens):
        claims = tokens.verify_token(tokens.create_session_token(7, "admin@example.com"))
        assert claims.sub == "7"
        assert claims.email == "admin@example.com"
        assert claims.purpose == TokenPurpose.SESSION
        assert claims.exp - claims.iat == 24 * 60 * 60
        assert not claims.is_expired

    def test_is_hs256(self, tokens):
        token = tokens.create_session_token(1, "a@b.c")
        assert jwt.get_unverified_header(token)["alg"] == "HS256"

    def test_expired(self, tokens):
        token = tokens.create_token(1, "a@b.c", ttl=timedelta(seconds=-10))
        with pytest.raises(TokenError) as exc_info:
            tokens.verify_token(token)
        assert exc_info.value.code == "token_expired"

    def test_signed_with_another_secret(self, tokens):
        forged = TokenService("f" * MIN_SECRET_LENGTH).create_session_token(1, "a@b.c")
        with pytest.raises(TokenError) as exc_info:
            tokens.verify_token(forged)
        assert exc_info.value.code == "invalid_token"

    def test_garbage(self, tokens):
        with pytest.raises(TokenError):
            tokens.verify_token("not.a.token")

    def test_oversized_token(self, tokens):
        with pytest.raises(TokenError) as exc_info:
            tokens.verify_token("a" * (MAX_TOKEN_LENGTH + 1))
        assert exc_info.value.code == "token_too_large"


# =============================================================================
# Purpose separation
# =============================================================================


class TestPurpose:
    def test_csrf_token_is_not_a_session(self, tokens):
        with pytest.raises(TokenError) as exc_info:
            tokens.verify_token(tokens.create_csrf_token(), TokenPurpose.SESSION)
        assert exc_info.value.code == "wrong_purpose"

    def test_session_token_is_not_a_csrf_token(self, tokens):
        session = tokens.create_session_token(1, "a@b.c")
        assert tokens.decode(session, TokenPurpose.CSRF) is None

    def test_csrf_token_lifetime(self, tokens):
        claims = tokens.verify_token(tokens.create_csrf_token(), TokenPurpose.CSRF)
        assert claims.exp - claims.iat == 60 * 60


class TestDecode:
    def test_returns_claims(self, tokens):
        claims = tokens.decode(tokens.create_session_token(3, "a@b.c"))
        assert claims is not None
        assert claims.sub == "3"

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_returns_none_for_bad_input(self, tokens, token):
        assert tokens.decode(token) is None
