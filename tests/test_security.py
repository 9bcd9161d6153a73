from datetime import datetime, timedelta, timezone

import jwt
import pytest

from application.services.token_service import TokenService
from core.exceptions import TokenExpiredException, UnauthorizedException
from domain.user.service import PasswordService
from shared.codes import BusinessCode


SECRET = "unit-test-secret"


def test_password_hash_roundtrip_and_salt():
    svc = PasswordService(iterations=1000)
    first = svc.hash_password("s3cret")
    second = svc.hash_password("s3cret")
    assert first != second  # salted
    assert svc.verify_password("s3cret", first)
    assert not svc.verify_password("nope", first)


def test_password_verify_rejects_malformed_hash():
    svc = PasswordService(iterations=1000)
    assert svc.verify_password("x", "not-a-hash") is False
    assert svc.verify_password("x", "md5$1$salt$abc") is False


def test_password_old_cost_factor_still_verifies():
    old = PasswordService(iterations=500).hash_password("pw")
    assert PasswordService(iterations=1000).verify_password("pw", old)


def test_password_service_rejects_zero_iterations():
    with pytest.raises(ValueError):
        PasswordService(iterations=0)


def test_token_carries_subject_and_type():
    svc = TokenService(secret_key=SECRET, expire_minutes=10)
    token = svc.create_access_token("user-1")
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["sub"] == "user-1"
    assert payload["type"] == "access"
    assert payload["exp"] - payload["iat"] == 600
    assert svc.expires_in == 600


def test_expired_token():
    svc = TokenService(secret_key=SECRET, expire_minutes=-1)
    token = svc.create_access_token("user-1")
    with pytest.raises(TokenExpiredException):
        svc.verify_access_token(token)


@pytest.mark.parametrize(
    "token",
    [
        "garbage",
        jwt.encode({"sub": "u", "exp": datetime.now(timezone.utc) + timedelta(minutes=5), "type": "access"}, "other-secret", algorithm="HS256"),
        jwt.encode({"sub": "u", "exp": datetime.now(timezone.utc) + timedelta(minutes=5), "type": "refresh"}, SECRET, algorithm="HS256"),
        jwt.encode({"exp": datetime.now(timezone.utc) + timedelta(minutes=5), "type": "access"}, SECRET, algorithm="HS256"),
    ],
    ids=["malformed", "wrong-secret", "wrong-type", "no-subject"],
)
def test_invalid_tokens(token):
    svc = TokenService(secret_key=SECRET)
    with pytest.raises(UnauthorizedException) as ei:
        svc.verify_access_token(token)
    assert ei.value.code == BusinessCode.TOKEN_INVALID
