"""
Tests for CredentialService: bcrypt hashing and token issue/verify.
"""

import pytest
from jose import jwt

from account_api.core.security import CredentialService, InvalidTokenError
from account_api.schemas.user import TokenClaims

SECRET = "test-secret-key"


def _claims() -> TokenClaims:
    return TokenClaims(user_id=7, email="al@x.com", type="user", name="Al")


def _flip_signature_byte(token: str) -> str:
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    replacement = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + replacement + signature[i + 1:]])


class TestPasswordHashing:
    def test_default_cost_is_eleven(self):
        service = CredentialService(secret=SECRET)
        hashed = service.hash_password("pw123456")
        assert hashed.startswith("$2b$11$")

    def test_same_password_hashes_differently_but_verifies(self, credentials):
        first = credentials.hash_password("pw123456")
        second = credentials.hash_password("pw123456")

        assert first != second
        assert credentials.verify_password("pw123456", first)
        assert credentials.verify_password("pw123456", second)

    def test_hash_never_contains_plaintext(self, credentials):
        assert "pw123456" not in credentials.hash_password("pw123456")

    def test_wrong_password_is_false(self, credentials):
        hashed = credentials.hash_password("pw123456")
        assert credentials.verify_password("nope1234", hashed) is False

    def test_malformed_hash_is_false_not_error(self, credentials):
        assert credentials.verify_password("pw123456", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_round_trip_claims(self, credentials):
        token = credentials.issue_token(_claims())
        assert credentials.verify_token(token) == _claims()

    def test_expiry_is_24_hours_after_issue(self, credentials, clock):
        token = credentials.issue_token(_claims())
        payload = jwt.get_unverified_claims(token)

        assert payload["exp"] - payload["iat"] == 24 * 3600
        assert payload["iat"] == int(clock().timestamp())
        assert payload["userId"] == 7

    def test_accepted_just_before_expiry(self, credentials, clock):
        token = credentials.issue_token(_claims())
        clock.advance(hours=23, minutes=59)
        assert credentials.verify_token(token).email == "al@x.com"

    def test_rejected_after_expiry(self, credentials, clock):
        token = credentials.issue_token(_claims())
        clock.advance(hours=24, seconds=1)
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)

    def test_rejected_when_signature_altered(self, credentials):
        token = credentials.issue_token(_claims())
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(_flip_signature_byte(token))

    def test_rejected_when_signed_with_other_secret(self, settings, clock):
        other = CredentialService(secret="another-secret", clock=clock)
        token = other.issue_token(_claims())

        service = CredentialService.from_settings(settings, clock=clock)
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_rejected_when_malformed(self, credentials):
        with pytest.raises(InvalidTokenError):
            credentials.verify_token("not.a.token")

    def test_rejected_when_claims_missing(self, credentials, clock):
        exp = int(clock().timestamp()) + 60
        token = jwt.encode({"email": "al@x.com", "exp": exp}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)

    def test_rejected_without_exp(self, credentials):
        token = jwt.encode(
            {"userId": 1, "email": "al@x.com", "type": "user", "name": "Al"},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)

    def test_missing_secret_is_fatal(self):
        service = CredentialService(secret=None)
        with pytest.raises(RuntimeError):
            service.issue_token(_claims())
        with pytest.raises(RuntimeError):
            service.verify_token("anything")
