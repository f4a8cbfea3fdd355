import time
from datetime import timedelta
from types import SimpleNamespace

import pytest
from jose import jwt

from clinic_backend.core.config import settings
from clinic_backend.core.exceptions import InvalidOrExpiredToken
from clinic_backend.core.security import (
    UserRole, create_access_token, create_user_token, decode_access_token,
    get_password_hash, verify_password,
)


def _user(role="doctor"):
    return SimpleNamespace(id="2", email="dr.smith@hospital.com", role=role, name="Dr. John Smith")


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = get_password_hash("Doctor@123")
        assert hashed != "Doctor@123"
        assert hashed.startswith("$2")
        assert verify_password("Doctor@123", hashed)
        assert not verify_password("wrong", hashed)

    def test_hashes_are_salted(self):
        assert get_password_hash("same") != get_password_hash("same")

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("Doctor@123", "plaintext-not-a-hash")
        assert not verify_password("Doctor@123", "")


class TestTokens:

    def test_token_carries_identity_claims(self):
        payload = decode_access_token(create_user_token(_user()))
        assert payload.id == "2"
        assert payload.email == "dr.smith@hospital.com"
        assert payload.role == UserRole.DOCTOR
        assert payload.name == "Dr. John Smith"

    def test_token_expires_after_24_hours(self):
        token = create_user_token(_user())
        claims = jwt.get_unverified_claims(token)
        assert abs(claims["exp"] - (time.time() + 24 * 3600)) <= 5

    def test_expired_token_is_rejected(self):
        token = create_access_token(
            {"id": "2", "email": "a@b.c", "role": "doctor", "name": "A"},
            expires_delta=timedelta(seconds=-10),
        )
        with pytest.raises(InvalidOrExpiredToken):
            decode_access_token(token)

    def test_wrong_signature_is_rejected(self):
        token = jwt.encode(
            {"id": "2", "email": "a@b.c", "role": "admin", "name": "A"},
            "not-the-secret",
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(InvalidOrExpiredToken):
            decode_access_token(token)

    def test_unknown_role_is_rejected(self):
        token = create_access_token({"id": "2", "email": "a@b.c", "role": "superuser"})
        with pytest.raises(InvalidOrExpiredToken):
            decode_access_token(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_garbage_is_rejected(self, token):
        with pytest.raises(InvalidOrExpiredToken):
            decode_access_token(token)
