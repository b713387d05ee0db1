"""Integration tests for progress endpoints."""
import pytest
from bson import ObjectId


GOAL_DATA = {
    "name": "Daily steps",
    "targetValue": 10000,
    "unit": "steps",
    "startDate": "2024-01-01T00:00:00Z",
    "endDate": "2024-01-31T00:00:00Z",
}


async def _create_goal(app_client, headers) -> str:
    response = await app_client.post("/goals", json=GOAL_DATA, headers=headers)
    return response.json()["id"]


@pytest.mark.asyncio
class TestProgressCreate:
    """Tests for POST /progress."""

    async def test_create_progress_success(self, app_client, login_as):
        """Test logging progress on an owned goal."""
        headers = await login_as()
        goal_id = await _create_goal(app_client, headers)

        response = await app_client.post(
            "/progress",
            json={"goalId": goal_id, "date": "2024-01-02T00:00:00Z", "value": 8500},
            headers=headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["goalId"] == goal_id
        assert data["value"] == 8500
        assert data["date"] == "2024-01-02T00:00:00Z"
        assert "id" in data

    async def test_create_progress_invalid(self, app_client, login_as, test_db):
        """Test invalid entries return 400 with every error."""
        headers = await login_as()

        response = await app_client.post(
            "/progress",
            json={"goalId": "bad", "date": "not-a-date", "value": -1},
            headers=headers,
        )

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["goalId", "date", "value"]
        assert await test_db["progress"].count_documents({}) == 0

    async def test_create_progress_on_other_users_goal(self, app_client, login_as, test_db):
        """Test progress cannot be logged against someone else's goal."""
        alice = await login_as(username="alice", email="alice@example.com")
        bob = await login_as(username="bob", email="bob@example.com")
        goal_id = await _create_goal(app_client, alice)

        response = await app_client.post(
            "/progress",
            json={"goalId": goal_id, "date": "2024-01-02T00:00:00Z", "value": 1},
            headers=bob,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "goalId", "msg": "Goal not found"}]
        assert await test_db["progress"].count_documents({}) == 0

    async def test_create_progress_unauthenticated(self, app_client):
        """Test that logging progress requires authentication."""
        response = await app_client.post(
            "/progress",
            json={"goalId": str(ObjectId()), "date": "2024-01-02", "value": 1},
        )

        assert response.status_code == 401


@pytest.mark.asyncio
class TestProgressList:
    """Tests for GET /progress/{goal_id}."""

    async def test_list_progress_sorted_by_date(self, app_client, login_as):
        """Test entries come back oldest date first."""
        headers = await login_as()
        goal_id = await _create_goal(app_client, headers)
        for day, value in [("03", 3000), ("01", 1000), ("02", 2000)]:
            await app_client.post(
                "/progress",
                json={"goalId": goal_id, "date": f"2024-01-{day}T00:00:00Z", "value": value},
                headers=headers,
            )

        response = await app_client.get(f"/progress/{goal_id}", headers=headers)

        assert response.status_code == 200
        assert [entry["value"] for entry in response.json()] == [1000, 2000, 3000]

    async def test_list_progress_round_trip(self, app_client, login_as):
        """Test a logged entry reads back exactly as it was returned on create."""
        headers = await login_as()
        goal_id = await _create_goal(app_client, headers)
        created = (
            await app_client.post(
                "/progress",
                json={"goalId": goal_id, "date": "2024-01-02T06:15:00.987654Z", "value": 4200},
                headers=headers,
            )
        ).json()

        response = await app_client.get(f"/progress/{goal_id}", headers=headers)

        assert response.json() == [created]
        assert created["date"].startswith("2024-01-02T06:15:00.987")

    async def test_list_progress_empty(self, app_client, login_as):
        """Test a goal with no entries returns an empty list."""
        headers = await login_as()
        goal_id = await _create_goal(app_client, headers)

        response = await app_client.get(f"/progress/{goal_id}", headers=headers)

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_progress_unknown_goal(self, app_client, login_as):
        """Test an unknown goal id is an empty list, not an error."""
        headers = await login_as()

        response = await app_client.get(f"/progress/{ObjectId()}", headers=headers)

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_progress_hides_other_users_entries(self, app_client, login_as):
        """Test another user cannot read the owner's entries."""
        alice = await login_as(username="alice", email="alice@example.com")
        bob = await login_as(username="bob", email="bob@example.com")
        goal_id = await _create_goal(app_client, alice)
        await app_client.post(
            "/progress",
            json={"goalId": goal_id, "date": "2024-01-02T00:00:00Z", "value": 1},
            headers=alice,
        )

        response = await app_client.get(f"/progress/{goal_id}", headers=bob)

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_progress_invalid_goal_id(self, app_client, login_as):
        """Test a malformed goal id returns 400."""
        headers = await login_as()

        response = await app_client.get("/progress/not-an-id", headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid Goal ID"}
