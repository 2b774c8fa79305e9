"""Tests for token helpers and the current-user dependency."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from enrollment_api.app.core.errors import UnauthorizedError
from enrollment_api.app.core.security import (
    create_access_token,
    decode_access_token,
    get_current_user_id,
)


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestTokens:
    def test_round_trip_keeps_claims(self) -> None:
        payload = decode_access_token(create_access_token({"sub": "7"}))
        assert payload["sub"] == "7"
        assert "exp" in payload

    def test_tampered_signature_rejected(self) -> None:
        token = create_access_token({"sub": "7"})
        header, payload, _ = token.split(".")
        assert decode_access_token(f"{header}.{payload}.AAAA") is None

    def test_expired_token_rejected(self, monkeypatch) -> None:
        token = create_access_token({"sub": "7"}, expires_delta=60)
        monkeypatch.setattr("enrollment_api.app.core.security.time.time", lambda: 10**12)
        assert decode_access_token(token) is None

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "%%%.%%%.%%%"])
    def test_garbage_rejected(self, token) -> None:
        assert decode_access_token(token) is None


class TestGetCurrentUserId:
    def test_returns_subject_as_int(self) -> None:
        assert get_current_user_id(bearer(create_access_token({"sub": "7"}))) == 7

    def test_missing_credentials(self) -> None:
        with pytest.raises(UnauthorizedError):
            get_current_user_id(None)

    def test_non_numeric_subject(self) -> None:
        with pytest.raises(UnauthorizedError):
            get_current_user_id(bearer(create_access_token({"sub": "admin@ex.com"})))
