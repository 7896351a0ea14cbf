"""/users/{user_id} route module."""

from fastapi import APIRouter

from usercred.adapters.api.v1.users.schemas import ErrorResponse, UserOut
from usercred.core.dependencies.auth import CurrentClaims
from usercred.infrastructure.dependency_injection.auth_dependencies import CredentialServiceDep

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=UserOut,
    summary="Get a user by id",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_user(user_id: str, claims: CurrentClaims, credential_service: CredentialServiceDep) -> UserOut:
    user = await credential_service.get(user_id)
    return UserOut.from_public(user)
