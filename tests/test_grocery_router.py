"""Tests for the grocery list API."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from recipeclub.config import get_settings
from recipeclub.connectors import CombineServiceConnector, ConnectorError
from recipeclub.main import app
from recipeclub.routers.grocery import get_combine_connector


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def grocery_request():
    return {
        "eventId": "evt-42",
        "recipeNames": {"r1": "Shakshuka", "r2": "Fried Rice"},
        "pantry": ["salt"],
        "ingredients": [
            {"recipeId": "r1", "name": "eggs", "quantity": 6, "category": "dairy"},
            {"recipeId": "r1", "name": "onion", "quantity": 1, "category": "produce"},
            {"recipeId": "r1", "name": "salt", "category": "spices"},
            {"recipeId": "r2", "name": "eggs", "quantity": 2, "category": "dairy"},
            {
                "recipeId": "r2",
                "name": "white rice",
                "quantity": 2,
                "unit": "cups",
                "category": "pantry",
            },
            {
                "recipeId": "r2",
                "name": "chopped onion",
                "quantity": 0.5,
                "unit": "cup",
                "category": "produce",
            },
        ],
    }


@pytest.fixture
def connector():
    connector = CombineServiceConnector(base_url="https://combine.test/combine")
    app.dependency_overrides[get_combine_connector] = lambda: connector
    yield connector
    app.dependency_overrides.clear()


def items_by_name(payload: dict) -> dict[str, dict]:
    return {item["name"]: item for group in payload["categories"] for item in group["items"]}


class TestCombineEndpoint:
    """Tests for POST /api/v1/grocery/combine."""

    def test_combine(self, client, grocery_request):
        """Test local consolidation, pantry filtering and grouping."""
        response = client.post("/api/v1/grocery/combine", json=grocery_request)
        assert response.status_code == 200

        data = response.json()
        assert data["source"] == "local"
        assert data["itemCount"] == 3
        assert [group["label"] for group in data["categories"]] == ["Produce", "Pantry"]

        items = items_by_name(data)
        assert "salt" not in items
        assert items["onion"]["totalQuantity"] == pytest.approx(1.5)
        assert items["onion"]["display"] == "1 1/2 onions"
        assert items["egg"]["display"] == "8 eggs"
        assert items["egg"]["sourceRecipes"] == ["Shakshuka", "Fried Rice"]
        assert items["rice"]["display"] == "2 cups rice"

    def test_empty_request(self, client):
        """Test that an empty event gives an empty list."""
        response = client.post("/api/v1/grocery/combine", json={})
        assert response.status_code == 200
        assert response.json() == {"source": "local", "itemCount": 0, "categories": []}

    def test_negative_quantity_rejected(self, client):
        """Test request validation."""
        response = client.post(
            "/api/v1/grocery/combine",
            json={"ingredients": [{"recipeId": "r1", "name": "egg", "quantity": -1}]},
        )
        assert response.status_code == 422

    def test_request_id_header(self, client):
        """Test that the request ID is echoed back."""
        response = client.post(
            "/api/v1/grocery/combine", json={}, headers={"X-Request-ID": "abc123"}
        )
        assert response.headers["X-Request-ID"] == "abc123"


class TestCsvEndpoint:
    """Tests for POST /api/v1/grocery/csv."""

    def test_csv(self, client, grocery_request):
        """Test the CSV export."""
        response = client.post("/api/v1/grocery/csv", json=grocery_request)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]

        assert response.text.split("\n") == [
            "Category,Item,Quantity,Unit,Recipes",
            "Produce,onion,1 1/2,,Shakshuka; Fried Rice",
            "Pantry,egg,8,,Shakshuka; Fried Rice",
            "Pantry,rice,2,cup,Fried Rice",
        ]


class TestSmartCombineEndpoint:
    """Tests for POST /api/v1/grocery/smart-combine."""

    def test_smart_result(self, client, connector, grocery_request):
        """Test that service items are used and pantry-filtered."""
        service_items = [
            {
                "name": "egg",
                "totalQuantity": 8,
                "category": "dairy",
                "sourceRecipes": ["Shakshuka"],
            },
            {"name": "salt", "category": "spices", "sourceRecipes": ["Shakshuka"]},
        ]
        with patch.object(connector, "combine", new_callable=AsyncMock) as mock_combine:
            mock_combine.return_value = {"items": service_items}
            response = client.post("/api/v1/grocery/smart-combine", json=grocery_request)

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "smart"
        assert list(items_by_name(data)) == ["egg"]
        assert data["categories"][0]["label"] == "Dairy"

    def test_falls_back_on_failure(self, client, connector, grocery_request):
        """Test that a failing service gives the local result."""
        with patch.object(connector, "combine", new_callable=AsyncMock) as mock_combine:
            mock_combine.side_effect = ConnectorError("API request failed with status 502", 502)
            response = client.post("/api/v1/grocery/smart-combine", json=grocery_request)

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "local"
        assert data["itemCount"] == 3

    def test_falls_back_when_unconfigured(self, client, grocery_request):
        """Test that no configured service gives the local result."""
        response = client.post("/api/v1/grocery/smart-combine", json=grocery_request)
        assert response.status_code == 200
        assert response.json()["source"] == "local"

    def test_falls_back_on_deadline(self, client, connector, grocery_request, monkeypatch):
        """Test that a slow service is abandoned after the deadline."""
        monkeypatch.setenv("SMART_COMBINE_DEADLINE", "0.05")
        get_settings.cache_clear()

        async def slow_combine(pre_combined):
            await asyncio.sleep(1)
            return {"items": []}

        with patch.object(connector, "combine", side_effect=slow_combine):
            response = client.post("/api/v1/grocery/smart-combine", json=grocery_request)

        assert response.status_code == 200
        assert response.json()["source"] == "local"
