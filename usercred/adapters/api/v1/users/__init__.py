"""Users router package: registration, login, lookup and password change."""

from fastapi import APIRouter

from .routes import change_password as change_password_route
from .routes import get_user as get_user_route
from .routes import login as login_route
from .routes import register as register_route

router = APIRouter(prefix="/users", tags=["users"])

# Static paths are registered before "/{user_id}" so they are matched first.
router.include_router(register_route.router, prefix="/register")
router.include_router(login_route.router, prefix="/login")
router.include_router(get_user_route.router)
router.include_router(change_password_route.router)

__all__ = ["router"]
