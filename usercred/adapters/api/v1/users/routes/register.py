"""/users/register route module."""

import structlog
from fastapi import APIRouter, status

from usercred.adapters.api.v1.users.schemas import ErrorResponse, RegisterRequest, UserOut
from usercred.domain.security.logging_service import secure_logging_service
from usercred.infrastructure.dependency_injection.auth_dependencies import CredentialServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Creates a user account from a username, email and password.",
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def register_user(payload: RegisterRequest, credential_service: CredentialServiceDep) -> UserOut:
    """Register a new user.

    Args:
        payload (RegisterRequest): User registration data
        credential_service (ICredentialService): Shared credential service

    Returns:
        UserOut: The created user, without its password hash

    Raises:
        ValidationError: If any field is malformed (422)
        AlreadyExistsError: If the username or email is taken (422)
    """
    logger.debug(
        "Registration attempt",
        username_masked=secure_logging_service.mask_username(payload.username),
        email_masked=secure_logging_service.mask_email(payload.email),
    )
    user = await credential_service.register(payload.username, payload.email, payload.password)
    return UserOut.from_public(user)
