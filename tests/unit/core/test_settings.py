import pytest
from pydantic import ValidationError

from usercred.core.config.settings import Settings


def test_short_hmac_secret_is_rejected():
    with pytest.raises(ValidationError, match="JWT_SECRET_KEY"):
        Settings(_env_file=None, JWT_ALGORITHM="HS256", JWT_SECRET_KEY="too-short")


def test_rsa_without_keys_is_rejected():
    with pytest.raises(ValidationError, match="JWT keys not found"):
        Settings(_env_file=None, JWT_ALGORITHM="RS256", JWT_PRIVATE_KEY="", JWT_PUBLIC_KEY="")


def test_unsupported_algorithm_is_rejected():
    with pytest.raises(ValidationError, match="Unsupported"):
        Settings(_env_file=None, JWT_ALGORITHM="none")


def test_hmac_uses_the_secret_for_both_directions():
    settings = Settings(_env_file=None, JWT_ALGORITHM="HS256", JWT_SECRET_KEY="k" * 32)

    assert settings.signing_key == settings.verification_key == "k" * 32


@pytest.mark.parametrize("raw, expected", [("", ""), ("/", ""), ("api/v1/", "/api/v1"), ("/api", "/api")])
def test_api_prefix_is_normalized(raw, expected):
    assert Settings(_env_file=None, API_PREFIX=raw).API_PREFIX == expected


def test_secret_is_not_exposed_in_repr():
    settings = Settings(_env_file=None, JWT_SECRET_KEY="s" * 40)

    assert "s" * 40 not in repr(settings)
