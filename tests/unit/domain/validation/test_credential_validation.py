"""Tests for per-operation input validation."""

from uuid import uuid4

import pytest

from usercred.core.exceptions import ValidationError
from usercred.domain.validation.credentials import (
    parse_user_id,
    validate_login,
    validate_password_change,
    validate_registration,
)


class TestValidateRegistration:
    def test_valid_input_is_normalized(self):
        data = validate_registration("  alice_01 ", "Alice@Example.COM", "secret1")

        assert data.username == "alice_01"
        assert data.email == "alice@example.com"
        assert data.password == "secret1"

    def test_every_failing_field_is_reported(self):
        with pytest.raises(ValidationError) as exc:
            validate_registration("ab", "not-an-email", "123")

        assert set(exc.value.fields) == {"username", "email", "password"}
        assert exc.value.code == "validation_error"

    @pytest.mark.parametrize("username", ["ab", "a" * 31, "bad name", "semi;colon", ""])
    def test_bad_usernames(self, username):
        with pytest.raises(ValidationError) as exc:
            validate_registration(username, "alice@example.com", "secret1")

        assert list(exc.value.fields) == ["username"]

    @pytest.mark.parametrize("username", ["abc", "a" * 30, "john.doe", "jane-doe", "x_y_z"])
    def test_good_usernames(self, username):
        assert validate_registration(username, "alice@example.com", "secret1").username == username

    def test_password_length_boundaries(self):
        assert validate_registration("alice", "alice@example.com", "123456").password == "123456"
        with pytest.raises(ValidationError):
            validate_registration("alice", "alice@example.com", "12345")

    def test_password_byte_limit(self):
        assert validate_registration("alice", "alice@example.com", "a" * 72)
        with pytest.raises(ValidationError) as exc:
            validate_registration("alice", "alice@example.com", "a" * 73)

        assert "72" in exc.value.fields["password"]

    def test_non_string_values_are_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_registration(None, 42, ["secret1"])

        assert set(exc.value.fields) == {"username", "email", "password"}

    def test_repr_hides_the_password(self):
        data = validate_registration("alice", "alice@example.com", "secret1")

        assert "secret1" not in repr(data)


class TestValidateLogin:
    def test_short_password_is_allowed_at_login(self):
        data = validate_login("ALICE@example.com", "x")

        assert data.email == "alice@example.com"
        assert data.password == "x"

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc:
            validate_login("", "")

        assert set(exc.value.fields) == {"email", "password"}


class TestValidatePasswordChange:
    def test_valid_input(self):
        user_id = uuid4()

        data = validate_password_change(str(user_id), "old", "new-secret")

        assert data.user_id == user_id
        assert data.old_password == "old"
        assert data.new_password == "new-secret"

    def test_bad_fields_are_keyed_by_name(self):
        with pytest.raises(ValidationError) as exc:
            validate_password_change("nope", "", "short")

        assert set(exc.value.fields) == {"id", "old_password", "new_password"}


def test_parse_user_id_accepts_uuid_and_string():
    user_id = uuid4()

    assert parse_user_id(user_id) == user_id
    assert parse_user_id(str(user_id)) == user_id


def test_parse_user_id_rejects_garbage():
    with pytest.raises(ValidationError) as exc:
        parse_user_id("123")

    assert "id" in exc.value.fields
