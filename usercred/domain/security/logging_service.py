"""Masking helpers for identity data that ends up in log lines.

Log lines may carry a masked username or email for audit purposes but never
the raw value, a password or a password hash.
"""

import hashlib
import secrets


class SecureLoggingService:
    """Consistent, non-reversible masking of identity fields."""

    USERNAME_MASK_LENGTH = 2
    TOKEN_MASK_LENGTH = 4

    def __init__(self) -> None:
        # Per-process salt: masks correlate within one process run only.
        self._salt = secrets.token_hex(8)

    def mask_username(self, username: str | None) -> str:
        """Return the first two characters plus a short salted digest.

        Args:
            username: Raw username to mask

        Returns:
            str: Consistently masked username
        """
        if not username:
            return "[empty]"

        if len(username) <= self.USERNAME_MASK_LENGTH:
            return "*" * len(username)

        digest = hashlib.sha256(f"{username.lower()}:{self._salt}".encode()).hexdigest()[:8]
        return f"{username[:self.USERNAME_MASK_LENGTH]}***{digest}"

    def mask_email(self, email: str | None) -> str:
        """Mask the local part like a username and keep only the TLD of the domain."""
        if not email:
            return "[empty]"

        if "@" not in email:
            return self.mask_username(email)

        local, domain = email.split("@", 1)
        domain_parts = domain.split(".")
        if len(domain_parts) > 1:
            masked_domain = f"{domain_parts[0][:2]}***.{domain_parts[-1]}"
        else:
            masked_domain = f"{domain[:2]}***"

        return f"{self.mask_username(local)}@{masked_domain}"

    def mask_token(self, token: str | None) -> str:
        if not token:
            return "[empty]"
        if len(token) <= self.TOKEN_MASK_LENGTH * 2:
            return "*" * len(token)
        return f"{token[:self.TOKEN_MASK_LENGTH]}***{token[-self.TOKEN_MASK_LENGTH:]}"


secure_logging_service = SecureLoggingService()
