"""Authentication settings: token signing and password hashing.
"""

import logging
from pathlib import Path

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

SYMMETRIC_ALGORITHMS = ("HS256", "HS384", "HS512")
ASYMMETRIC_ALGORITHMS = ("RS256", "RS384", "RS512")


class AuthSettings(BaseSettings):
    """Defines settings for token issuance and password hashing.

    HMAC algorithms sign with JWT_SECRET_KEY. RSA algorithms sign with
    JWT_PRIVATE_KEY and verify with JWT_PUBLIC_KEY, which may also be provided
    as private.pem/public.pem in the working directory.

    Security Note:
        - Signing keys must never be logged or committed.
        - BCRYPT_WORK_FACTOR can be raised over time; hashes created with an
          older factor keep verifying because bcrypt stores the cost in the hash.
    """

    JWT_ALGORITHM: str = "HS256"
    JWT_SECRET_KEY: SecretStr = SecretStr("")
    JWT_PRIVATE_KEY: SecretStr = SecretStr("")
    JWT_PUBLIC_KEY: str = ""
    JWT_ISSUER: str = "usercred"
    JWT_AUDIENCE: str = "usercred:api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(ge=1, default=15)

    BCRYPT_WORK_FACTOR: int = Field(ge=4, le=31, default=12)

    # Upper bound for a whole credential operation when the caller gives none.
    OPERATION_TIMEOUT_SECONDS: float = Field(gt=0, default=10.0)

    @model_validator(mode="after")
    def _load_and_validate_jwt_keys(self) -> "AuthSettings":
        """Ensures a usable signing key exists for the configured algorithm.

        Returns:
            Self instance with loaded keys.

        Raises:
            ValueError: If the algorithm is unsupported or its key is missing.
        """
        if self.JWT_ALGORITHM in SYMMETRIC_ALGORITHMS:
            if len(self.JWT_SECRET_KEY.get_secret_value()) < 32:
                error_msg = "JWT_SECRET_KEY must be set and at least 32 characters long."
                logger.error(error_msg)
                raise ValueError(error_msg)
        elif self.JWT_ALGORITHM in ASYMMETRIC_ALGORITHMS:
            self._load_keys_from_pem_files()
            if not self.JWT_PRIVATE_KEY.get_secret_value() or not self.JWT_PUBLIC_KEY:
                error_msg = (
                    "JWT keys not found. Please provide JWT_PRIVATE_KEY and JWT_PUBLIC_KEY "
                    "either via .env variables or through private.pem/public.pem files."
                )
                logger.error(error_msg)
                raise ValueError(error_msg)
        else:
            raise ValueError(f"Unsupported JWT_ALGORITHM: {self.JWT_ALGORITHM}")

        logger.info("JWT signing configuration validated (%s).", self.JWT_ALGORITHM)
        return self

    def _load_keys_from_pem_files(self) -> None:
        """Loads RSA keys from private.pem and public.pem when present.

        File contents override environment variables.
        """
        private_key_path = Path("private.pem").resolve()
        public_key_path = Path("public.pem").resolve()

        if private_key_path.is_file():
            private_key = private_key_path.read_text().strip()
            if private_key:
                self.JWT_PRIVATE_KEY = SecretStr(private_key)
                logger.info("Loaded JWT private key from private.pem.")

        if public_key_path.is_file():
            public_key = public_key_path.read_text().strip()
            if public_key:
                self.JWT_PUBLIC_KEY = public_key
                logger.info("Loaded JWT public key from public.pem.")

    @property
    def signing_key(self) -> str:
        if self.JWT_ALGORITHM in SYMMETRIC_ALGORITHMS:
            return self.JWT_SECRET_KEY.get_secret_value()
        return self.JWT_PRIVATE_KEY.get_secret_value()

    @property
    def verification_key(self) -> str:
        if self.JWT_ALGORITHM in SYMMETRIC_ALGORITHMS:
            return self.JWT_SECRET_KEY.get_secret_value()
        return self.JWT_PUBLIC_KEY
