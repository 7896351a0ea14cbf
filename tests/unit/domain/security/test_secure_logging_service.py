from usercred.domain.security import logging_service
from usercred.domain.security.logging_service import SecureLoggingService


def test_username_mask_is_stable_and_hides_the_value():
    service = SecureLoggingService()

    masked = service.mask_username("alice_smith")

    assert masked.startswith("al***")
    assert "alice_smith" not in masked
    assert service.mask_username("ALICE_SMITH")[5:] == masked[5:]


def test_email_mask_keeps_only_the_tld():
    masked = SecureLoggingService().mask_email("alice@example.com")

    assert "alice" not in masked
    assert "example" not in masked
    assert masked.endswith("@ex***.com")


def test_token_mask():
    service = SecureLoggingService()

    assert service.mask_token("abcd.efghijkl.mnop") == "abcd***mnop"
    assert service.mask_token("short") == "*****"
    assert service.mask_token(None) == "[empty]"


def test_module_holds_no_logger_of_its_own():
    assert not hasattr(logging_service, "logger")
    assert isinstance(logging_service.secure_logging_service, SecureLoggingService)
