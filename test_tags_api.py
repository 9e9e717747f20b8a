import pytest
from unittest.mock import AsyncMock, patch
from sqlalchemy.exc import OperationalError

from src.services.tag_service import TagService


class TestTagsHttp:
    """Tag endpoints through the whole application"""

    def test_create_and_list(self, client):
        response = client.post("/api/tags", json={"name": "french"})

        assert response.status_code == 201
        tag = response.json()
        assert tag["name"] == "french"
        assert isinstance(tag["id"], int)

        assert client.get("/api/tags").json() == [tag]
        assert client.get(f"/api/tags/{tag['id']}").json() == tag

    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": 12}])
    def test_create_invalid_is_400(self, client, body):
        with patch.object(TagService, "create", new_callable=AsyncMock) as mock_create:
            response = client.post("/api/tags", json=body)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"
        mock_create.assert_not_called()

    def test_update(self, client):
        tag = client.post("/api/tags", json={"name": "old"}).json()

        response = client.put(f"/api/tags/{tag['id']}", json={"name": "new"})

        assert response.status_code == 200
        assert response.json() == {"id": tag["id"], "name": "new"}

    def test_update_with_empty_body_keeps_tag(self, client):
        tag = client.post("/api/tags", json={"name": "same"}).json()

        response = client.put(f"/api/tags/{tag['id']}", json={})

        assert response.status_code == 200
        assert response.json() == tag

    def test_delete_returns_tag_and_unlinks_flashcards(self, client):
        tag = client.post("/api/tags", json={"name": "temp"}).json()
        flashcard = client.post(
            "/api/flashcards", json={"front": "Q", "back": "A", "tagIds": [tag["id"]]}
        ).json()

        response = client.delete(f"/api/tags/{tag['id']}")

        assert response.status_code == 200
        assert response.json() == tag
        assert client.get("/api/tags").json() == []
        assert client.get(f"/api/flashcards/{flashcard['id']}").json()["tags"] == []

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_missing_tag_is_404(self, client, method):
        kwargs = {"json": {"name": "x"}} if method == "put" else {}

        response = getattr(client, method)("/api/tags/404", **kwargs)

        assert response.status_code == 404
        assert response.json() == {"error": "Tag not found"}

    def test_store_error_is_500(self, client):
        error = OperationalError("SELECT", {}, Exception("database is locked"))

        with patch.object(TagService, "get_all", new_callable=AsyncMock, side_effect=error):
            response = client.get("/api/tags")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to retrieve tags"}
