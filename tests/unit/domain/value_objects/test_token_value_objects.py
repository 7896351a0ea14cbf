from datetime import datetime, timezone
from uuid import uuid4

import pytest

from usercred.domain.value_objects.token import Token, UserClaims


def test_claims_round_trip_through_payload():
    claims = UserClaims(id=uuid4(), username="alice", email="alice@example.com")

    payload = claims.to_payload()

    assert payload["sub"] == str(claims.id)
    assert UserClaims.from_payload(payload) == claims


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "alice", "email": "alice@example.com"},
        {"sub": "not-a-uuid", "username": "alice", "email": "alice@example.com"},
        {"sub": str(uuid4()), "email": "alice@example.com"},
    ],
)
def test_claims_reject_incomplete_payloads(payload):
    with pytest.raises(ValueError):
        UserClaims.from_payload(payload)


@pytest.mark.parametrize("value", ["", "only.two", "a.b.c.d"])
def test_token_requires_jwt_shape(value):
    with pytest.raises(ValueError):
        Token(value=value, expires_at=datetime.now(timezone.utc))


def test_token_str_is_the_raw_value():
    token = Token(value="a.b.c", expires_at=datetime.now(timezone.utc))

    assert str(token) == "a.b.c"
    assert "a.b.c" not in repr(token)
