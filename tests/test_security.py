from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from passlib.hash import bcrypt_sha256

from authserver.core.errors import Unauthorized
from authserver.core.security import PasswordHasher, TokenIssuer

from conftest import TEST_SECRET


# =============================================================================
# PasswordHasher
# =============================================================================


def test_hash_round_trip(hasher):
    hashed = hasher.hash("correct horse")

    assert hashed != "correct horse"
    assert hasher.verify("correct horse", hashed)


def test_hash_is_salted(hasher):
    assert hasher.hash("same-password") != hasher.hash("same-password")


LONG_PREFIX = "a" * 72


@pytest.mark.parametrize(
    "password, other",
    [
        ("password-one", "password-two"),
        (LONG_PREFIX + "SECRET-ONE", LONG_PREFIX + "totally-different"),
        ("abc\u0000defgh", "abc"),
        ("abc\u0000defgh", "abc\u0000defgX"),
        ("pässwörd-ünïcode", "passwörd-ünïcode"),
        ("密码密码密码", "密码密码密碼"),
    ],
)
def test_verify_accepts_only_the_hashed_password(hasher, password, other):
    hashed = hasher.hash(password)

    assert hasher.verify(password, hashed)
    assert not hasher.verify(other, hashed)


def test_verify_is_case_sensitive(hasher):
    hashed = hasher.hash("MixedCase99")

    assert not hasher.verify("MIXEDCASE99", hashed)
    assert not hasher.verify("mixedcase99", hashed)


def test_verify_returns_false_for_garbage_hash(hasher):
    assert not hasher.verify("whatever", "not-a-bcrypt-hash")


def test_rounds_are_embedded_in_hash():
    assert bcrypt_sha256.from_string(PasswordHasher(rounds=4).hash("secret")).rounds == 4
    assert bcrypt_sha256.from_string(PasswordHasher(rounds=5).hash("secret")).rounds == 5


def test_dummy_verify_does_not_raise(hasher):
    hasher.dummy_verify("anything")


def test_dummy_hash_is_ready_before_first_use(hasher):
    assert hasher._dummy_hash.startswith("$bcrypt-sha256$")


# =============================================================================
# TokenIssuer
# =============================================================================


def test_issue_and_authenticate(issuer):
    token = issuer.issue(42)

    assert token
    assert issuer.authenticate(token) == 42


def test_each_issued_token_is_distinct(issuer):
    assert issuer.issue(7) != issuer.issue(7)


def test_rejects_tampered_token(issuer):
    token = issuer.issue(1)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(Unauthorized):
        issuer.authenticate(tampered)


def test_rejects_token_signed_with_other_key(issuer):
    foreign = TokenIssuer("some-other-secret").issue(1)

    with pytest.raises(Unauthorized):
        issuer.authenticate(foreign)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_rejects_malformed_token(issuer, token):
    with pytest.raises(Unauthorized):
        issuer.authenticate(token)


def test_rejects_token_without_subject(issuer):
    token = jwt.encode({"jti": "x"}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(Unauthorized):
        issuer.authenticate(token)


def test_no_expiry_by_default(issuer):
    claims = jwt.get_unverified_claims(issuer.issue(3))

    assert "exp" not in claims
    assert claims["sub"] == "3"


def test_expiry_is_applied_when_configured():
    issuer = TokenIssuer(TEST_SECRET, expires_minutes=30)
    claims = jwt.get_unverified_claims(issuer.issue(3))

    assert "exp" in claims


def test_rejects_expired_token():
    issuer = TokenIssuer(TEST_SECRET, expires_minutes=5)
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    expired = jwt.encode({"sub": "3", "exp": past}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(Unauthorized):
        issuer.authenticate(expired)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenIssuer("")
