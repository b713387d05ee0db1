"""Goal service - owner-scoped goal storage."""
import logging
from typing import Optional

from bson import ObjectId

from fitgoals.exceptions import MalformedIdentifier, NotFound, ValidationFailed
from fitgoals.models.common import as_utc, utcnow
from fitgoals.models.goal import DATE_ORDER_MESSAGE, Goal, GoalCreate, GoalUpdate

logger = logging.getLogger(__name__)


def parse_goal_id(goal_id: str) -> ObjectId:
    """Parse a goal id from the URL, raising MalformedIdentifier if it is not an ObjectId."""
    if not ObjectId.is_valid(goal_id):
        raise MalformedIdentifier("Invalid Goal ID")
    return ObjectId(goal_id)


class GoalService:
    """Service for handling goal operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.goals = db["goals"]

    def _doc_to_goal(self, doc: dict) -> Goal:
        """Convert database document to Goal model."""
        return Goal(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
            description=doc.get("description", ""),
            target_value=doc["target_value"],
            unit=doc["unit"],
            start_date=doc["start_date"],
            end_date=doc["end_date"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_goal(self, user_id: str, goal_create: GoalCreate) -> Goal:
        """
        Create a new goal owned by ``user_id``.

        Args:
            user_id: Authenticated user ID (never taken from the request body)
            goal_create: Validated goal data

        Returns:
            Created goal object
        """
        now = utcnow()
        goal_doc = {
            "user_id": user_id,
            "name": goal_create.name,
            "description": goal_create.description,
            "target_value": goal_create.target_value,
            "unit": goal_create.unit.value,
            "start_date": goal_create.start_date,
            "end_date": goal_create.end_date,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.goals.insert_one(goal_doc)
        goal_doc["_id"] = result.inserted_id
        logger.info("Created goal %s for user %s", result.inserted_id, user_id)

        return self._doc_to_goal(goal_doc)

    async def list_goals(self, user_id: str) -> list[Goal]:
        """List all goals owned by a user, newest first."""
        cursor = self.goals.find({"user_id": user_id}, sort=[("created_at", -1)])
        goal_docs = await cursor.to_list(length=None)
        return [self._doc_to_goal(doc) for doc in goal_docs]

    async def find_owned_goal(self, user_id: str, goal_id: str) -> Optional[dict]:
        """
        Look up a goal document scoped to its owner.

        Returns None both when the goal does not exist and when it belongs
        to another user.

        Raises:
            MalformedIdentifier: If goal_id is not a valid ObjectId
        """
        object_id = parse_goal_id(goal_id)
        return await self.goals.find_one({"_id": object_id, "user_id": user_id})

    async def get_goal(self, user_id: str, goal_id: str) -> Goal:
        """
        Get a single goal by id.

        Raises:
            MalformedIdentifier: If goal_id is not a valid ObjectId
            NotFound: If goal is missing or not owned by user_id
        """
        goal_doc = await self.find_owned_goal(user_id, goal_id)
        if not goal_doc:
            raise NotFound("Goal not found")
        return self._doc_to_goal(goal_doc)

    async def update_goal(self, user_id: str, goal_id: str, goal_update: GoalUpdate) -> Goal:
        """
        Update a goal.

        Only the fields present in ``goal_update`` are changed; the date order
        is checked against the merged record.

        Raises:
            MalformedIdentifier: If goal_id is not a valid ObjectId
            NotFound: If goal is missing or not owned by user_id
            ValidationFailed: If the merged start date is after the end date
        """
        existing = await self.find_owned_goal(user_id, goal_id)
        if not existing:
            raise NotFound("Goal not found")

        changes = goal_update.model_dump(exclude_unset=True)
        changes = {field: value for field, value in changes.items() if value is not None}
        if "unit" in changes:
            changes["unit"] = goal_update.unit.value

        start = as_utc(changes.get("start_date", existing["start_date"]))
        end = as_utc(changes.get("end_date", existing["end_date"]))
        if start > end:
            raise ValidationFailed.for_field("endDate", DATE_ORDER_MESSAGE)

        changes["updated_at"] = utcnow()
        updated_doc = await self.goals.find_one_and_update(
            {"_id": existing["_id"], "user_id": user_id},
            {"$set": changes},
            return_document=True,
        )

        return self._doc_to_goal(updated_doc)
