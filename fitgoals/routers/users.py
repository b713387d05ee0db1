"""Users router - the authenticated user's own profile."""
import logging

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from fitgoals.database import get_database
from fitgoals.exceptions import InternalFailure
from fitgoals.models.user import ChangePasswordRequest, TokenClaims, User
from fitgoals.routers.auth import get_current_user
from fitgoals.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=User)
async def get_me(
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Get current authenticated user.

    Returns 404 if the token's subject no longer exists.
    """
    service = AuthService(db)

    try:
        return await service.get_user_by_id(claims.sub)
    except PyMongoError as e:
        logger.error("Error fetching user profile: %s", e)
        raise InternalFailure("Failed to fetch user profile", type(e).__name__)


@router.put("/me/password", response_model=User)
async def change_password(
    body: ChangePasswordRequest,
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Change the authenticated user's password.

    - Requires the current password (401 if wrong)
    - Leaves the stored hash alone when the new password is the same
    """
    service = AuthService(db)

    try:
        return await service.change_password(
            user_id=claims.sub,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    except PyMongoError as e:
        logger.error("Error changing password: %s", e)
        raise InternalFailure("Failed to change password", type(e).__name__)
