"""Progress router - log and read progress against goals."""
import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from fitgoals.database import get_database
from fitgoals.exceptions import InternalFailure
from fitgoals.models.progress import Progress, ProgressCreate
from fitgoals.models.user import TokenClaims
from fitgoals.routers.auth import get_current_user
from fitgoals.services.progress_service import ProgressService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("", response_model=Progress, status_code=status.HTTP_201_CREATED)
async def create_progress(
    entry: ProgressCreate,
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Log a progress entry.

    - The goal must belong to the authenticated user (400 otherwise)
    """
    service = ProgressService(db)
    try:
        return await service.create_progress(user_id=claims.sub, progress_create=entry)
    except PyMongoError as e:
        logger.error("Error creating progress entry: %s", e)
        raise InternalFailure("Failed to add progress", type(e).__name__)


@router.get("/{goal_id}", response_model=list[Progress])
async def list_progress(
    goal_id: str,
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    List the authenticated user's progress for a goal.

    - Returns an empty list when there are no entries
    - Returns 400 if the goal id is malformed
    """
    service = ProgressService(db)
    try:
        return await service.list_progress(user_id=claims.sub, goal_id=goal_id)
    except PyMongoError as e:
        logger.error("Error fetching progress entries: %s", e)
        raise InternalFailure("Failed to fetch progress", type(e).__name__)
