"""Tests for ProgressService."""
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId


def _mock_db(goals, progress):
    mock_db = MagicMock()
    mock_db.__getitem__.side_effect = lambda name: {"goals": goals, "progress": progress}[name]
    return mock_db


@pytest.mark.asyncio
class TestProgressServiceCreate:
    """Tests for logging progress."""

    async def test_create_progress_success(self):
        """Test logging progress against an owned goal."""
        from fitgoals.models.progress import ProgressCreate
        from fitgoals.services.progress_service import ProgressService

        goal_id = ObjectId()
        mock_goals = AsyncMock()
        mock_goals.find_one.return_value = {"_id": goal_id, "user_id": "user123"}
        mock_progress = AsyncMock()
        inserted_id = ObjectId()
        mock_progress.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        service = ProgressService(_mock_db(mock_goals, mock_progress))
        entry = await service.create_progress(
            user_id="user123",
            progress_create=ProgressCreate(
                goal_id=str(goal_id), date="2024-02-01T07:30:00Z", value=5.5
            ),
        )

        assert entry.id == str(inserted_id)
        assert entry.goal_id == str(goal_id)
        assert entry.user_id == "user123"
        assert entry.value == 5.5
        assert entry.date == datetime(2024, 2, 1, 7, 30, tzinfo=timezone.utc)
        assert mock_goals.find_one.call_args[0][0] == {"_id": goal_id, "user_id": "user123"}

    async def test_create_progress_for_foreign_goal(self):
        """Test that a goal owned by someone else is rejected."""
        from fitgoals.exceptions import ValidationFailed
        from fitgoals.models.progress import ProgressCreate
        from fitgoals.services.progress_service import ProgressService

        mock_goals = AsyncMock()
        mock_goals.find_one.return_value = None
        mock_progress = AsyncMock()

        service = ProgressService(_mock_db(mock_goals, mock_progress))

        with pytest.raises(ValidationFailed) as exc_info:
            await service.create_progress(
                user_id="user123",
                progress_create=ProgressCreate(
                    goal_id=str(ObjectId()), date="2024-02-01", value=1
                ),
            )

        assert exc_info.value.errors == [{"field": "goalId", "msg": "Goal not found"}]
        mock_progress.insert_one.assert_not_called()


@pytest.mark.asyncio
class TestProgressServiceList:
    """Tests for listing progress."""

    async def test_list_progress_scoped_to_owner_and_goal(self):
        """Test the query filters by owner and goal."""
        from fitgoals.services.progress_service import ProgressService

        goal_id = str(ObjectId())
        mock_progress = MagicMock()
        mock_cursor = MagicMock()
        mock_cursor.to_list = AsyncMock(return_value=[
            {
                "_id": ObjectId(),
                "user_id": "user123",
                "goal_id": goal_id,
                "date": datetime(2024, 2, 1),
                "value": 3.0,
                "created_at": datetime(2024, 2, 1),
                "updated_at": datetime(2024, 2, 1),
            }
        ])
        mock_progress.find.return_value = mock_cursor

        service = ProgressService(_mock_db(AsyncMock(), mock_progress))
        entries = await service.list_progress(user_id="user123", goal_id=goal_id)

        assert len(entries) == 1
        assert entries[0].value == 3.0
        assert mock_progress.find.call_args[0][0] == {"user_id": "user123", "goal_id": goal_id}

    async def test_list_progress_empty(self):
        """Test a goal with no entries returns an empty list."""
        from fitgoals.services.progress_service import ProgressService

        mock_goals = AsyncMock()
        mock_progress = MagicMock()
        mock_cursor = MagicMock()
        mock_cursor.to_list = AsyncMock(return_value=[])
        mock_progress.find.return_value = mock_cursor

        service = ProgressService(_mock_db(mock_goals, mock_progress))

        assert await service.list_progress(user_id="user123", goal_id=str(ObjectId())) == []
        # No parent lookup
        mock_goals.find_one.assert_not_called()

    async def test_list_progress_malformed_goal_id(self):
        """Test a malformed goal id is rejected before querying."""
        from fitgoals.exceptions import MalformedIdentifier
        from fitgoals.services.progress_service import ProgressService

        mock_progress = MagicMock()

        service = ProgressService(_mock_db(AsyncMock(), mock_progress))

        with pytest.raises(MalformedIdentifier, match="Invalid Goal ID"):
            await service.list_progress(user_id="user123", goal_id="1234")
        mock_progress.find.assert_not_called()
