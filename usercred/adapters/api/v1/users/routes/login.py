"""/users/login route module."""

import structlog
from fastapi import APIRouter

from usercred.adapters.api.v1.users.schemas import ErrorResponse, LoginRequest, LoginResponse
from usercred.domain.security.logging_service import secure_logging_service
from usercred.infrastructure.dependency_injection.auth_dependencies import CredentialServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=LoginResponse,
    summary="Log in with email and password",
    description="Verifies the credentials and returns the user with a signed bearer token.",
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def login_user(payload: LoginRequest, credential_service: CredentialServiceDep) -> LoginResponse:
    """Authenticate a user.

    Unknown email, inactive account and wrong password all answer the same
    422 ``invalid_credentials`` error.
    """
    logger.debug("Login attempt", email_masked=secure_logging_service.mask_email(payload.email))
    result = await credential_service.login(payload.email, payload.password)
    return LoginResponse.from_result(result)
