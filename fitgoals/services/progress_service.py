"""Progress service - owner-scoped progress entries."""
import logging

from fitgoals.exceptions import ValidationFailed
from fitgoals.models.common import utcnow
from fitgoals.models.progress import Progress, ProgressCreate
from fitgoals.services.goal_service import GoalService, parse_goal_id

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for logging and reading goal progress."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.progress = db["progress"]
        self.goal_service = GoalService(db)

    def _doc_to_progress(self, doc: dict) -> Progress:
        return Progress(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            goal_id=doc["goal_id"],
            date=doc["date"],
            value=doc["value"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_progress(self, user_id: str, progress_create: ProgressCreate) -> Progress:
        """
        Log a progress entry against one of the user's goals.

        Raises:
            ValidationFailed: If the goal does not exist or belongs to someone else
        """
        goal_doc = await self.goal_service.find_owned_goal(user_id, progress_create.goal_id)
        if not goal_doc:
            raise ValidationFailed.for_field("goalId", "Goal not found")

        now = utcnow()
        progress_doc = {
            "user_id": user_id,
            "goal_id": progress_create.goal_id,
            "date": progress_create.date,
            "value": progress_create.value,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.progress.insert_one(progress_doc)
        progress_doc["_id"] = result.inserted_id
        logger.info("Logged progress %s on goal %s", result.inserted_id, progress_create.goal_id)

        return self._doc_to_progress(progress_doc)

    async def list_progress(self, user_id: str, goal_id: str) -> list[Progress]:
        """
        List the user's progress entries for a goal, oldest date first.

        The goal itself is not looked up; an unknown goal yields an empty list.

        Raises:
            MalformedIdentifier: If goal_id is not a valid ObjectId
        """
        parse_goal_id(goal_id)
        cursor = self.progress.find(
            {"user_id": user_id, "goal_id": goal_id},
            sort=[("date", 1)],
        )
        progress_docs = await cursor.to_list(length=None)
        return [self._doc_to_progress(doc) for doc in progress_docs]
