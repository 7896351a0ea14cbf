"""/users/{user_id}/password route module."""

import uuid

import structlog
from fastapi import APIRouter

from usercred.adapters.api.v1.users.schemas import ChangePasswordRequest, ErrorResponse, MessageResponse
from usercred.core.dependencies.auth import CurrentClaims
from usercred.core.exceptions import NotFoundError
from usercred.infrastructure.dependency_injection.auth_dependencies import CredentialServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.put(
    "/{user_id}/password",
    response_model=MessageResponse,
    summary="Change a user's password",
    description="Changes the password of the token's own user after checking the old password.",
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def change_password(
    user_id: str,
    payload: ChangePasswordRequest,
    claims: CurrentClaims,
    credential_service: CredentialServiceDep,
) -> MessageResponse:
    """Change the password of the authenticated user.

    A token may only change its own subject's password. Any other id,
    including one that is not a UUID, answers 404 so the caller learns
    nothing about other accounts.

    Raises:
        NotFoundError: If ``user_id`` is not the token's subject (404)
        InvalidPasswordError: If the old password does not match (422)
        ValidationError: If the new password breaks the policy (422)
    """
    try:
        target_id = uuid.UUID(user_id)
    except ValueError as e:
        raise NotFoundError() from e
    if target_id != claims.id:
        logger.info("Password change for another user refused", subject=str(claims.id))
        raise NotFoundError()

    await credential_service.change_password(target_id, payload.old_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")
