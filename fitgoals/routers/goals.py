"""Goal router - API endpoints for goal management."""
import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from fitgoals.database import get_database
from fitgoals.exceptions import InternalFailure
from fitgoals.models.goal import Goal, GoalCreate, GoalUpdate
from fitgoals.models.user import TokenClaims
from fitgoals.routers.auth import get_current_user
from fitgoals.services.goal_service import GoalService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Create a new goal.

    - Requires authentication
    - Owner is always the authenticated user
    """
    service = GoalService(db)
    try:
        return await service.create_goal(user_id=claims.sub, goal_create=goal)
    except PyMongoError as e:
        logger.error("Error creating goal: %s", e)
        raise InternalFailure("Failed to create goal", type(e).__name__)


@router.get("", response_model=list[Goal])
async def list_goals(
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """List goals for the authenticated user, newest first."""
    service = GoalService(db)
    try:
        return await service.list_goals(user_id=claims.sub)
    except PyMongoError as e:
        logger.error("Error fetching goals: %s", e)
        raise InternalFailure("Failed to fetch goals", type(e).__name__)


@router.get("/{goal_id}", response_model=Goal)
async def get_goal(
    goal_id: str,
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Get a single goal by id.

    - Returns 400 if the id is malformed
    - Returns 404 if goal is missing or belongs to another user
    """
    service = GoalService(db)
    try:
        return await service.get_goal(user_id=claims.sub, goal_id=goal_id)
    except PyMongoError as e:
        logger.error("Error fetching goal: %s", e)
        raise InternalFailure("Failed to fetch goal", type(e).__name__)


@router.patch("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    goal_update: GoalUpdate,
    claims: TokenClaims = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Update a goal.

    - Only fields present in the body change
    - Returns 404 if goal is missing or belongs to another user
    """
    service = GoalService(db)
    try:
        return await service.update_goal(
            user_id=claims.sub,
            goal_id=goal_id,
            goal_update=goal_update,
        )
    except PyMongoError as e:
        logger.error("Error updating goal: %s", e)
        raise InternalFailure("Failed to update goal", type(e).__name__)
