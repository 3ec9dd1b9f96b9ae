"""Password hashing and token service tests."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from movie_api.security import (
    BCRYPT_ROUNDS,
    InvalidTokenError,
    TokenService,
    hash_password,
    verify_password,
)
from tests.factories import TEST_SECRET, make_settings


class TestPasswordHashing:
    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("secret1")
        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_fresh_salt_per_hash(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_uses_ten_rounds(self):
        assert BCRYPT_ROUNDS == 10
        assert hash_password("secret1").startswith("$2b$10$")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False

    def test_long_password_is_accepted(self):
        password = "x" * 100
        assert verify_password(password, hash_password(password))


class TestTokenService:
    def test_issue_then_verify_returns_user_id(self):
        tokens = TokenService(TEST_SECRET)
        user_id = uuid4()
        assert tokens.verify(tokens.issue(user_id)) == user_id

    def test_token_expires_after_thirty_days(self):
        tokens = TokenService(TEST_SECRET)
        payload = jwt.decode(tokens.issue(uuid4()), TEST_SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == int(timedelta(days=30).total_seconds())

    def test_from_settings_uses_configured_secret(self):
        tokens = TokenService.from_settings(make_settings(secret_key="another-secret"))
        token = tokens.issue(uuid4())
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_wrong_signature_fails(self):
        token = TokenService("other-secret").issue(uuid4())
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_expired_token_fails(self):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": str(uuid4()), "iat": now - timedelta(days=31), "exp": now - timedelta(days=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_fails(self, token):
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_missing_subject_fails(self):
        token = jwt.encode({"exp": datetime.now(UTC) + timedelta(days=1)}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_non_uuid_subject_fails(self):
        token = jwt.encode(
            {"sub": "42", "exp": datetime.now(UTC) + timedelta(days=1)},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(TEST_SECRET).verify(token)

    def test_blank_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")
