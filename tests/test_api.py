"""
Tests for the API endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from briki.main import app
from briki.api.routes import get_analytics_repository
from briki.assistant.memory import ConversationMemory, InMemoryContextStore, get_conversation_memory
from briki.config import Settings
from briki.core.runt_client import RuntClient, get_runt_client
from briki.plans.models import PlanAnalytics


@pytest.fixture
def analytics_repository():
    repository = MagicMock()
    repository.get_analytics.return_value = {}
    return repository


@pytest.fixture
def client(analytics_repository):
    """Create test client with in-process dependencies."""
    memory = ConversationMemory(InMemoryContextStore())
    runt = RuntClient(Settings(use_mock_runt=True), session=MagicMock())

    app.dependency_overrides[get_conversation_memory] = lambda: memory
    app.dependency_overrides[get_runt_client] = lambda: runt
    app.dependency_overrides[get_analytics_repository] = lambda: analytics_repository
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check_structure(self, client):
        """Test health endpoint returns expected structure."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "contextStore" in data
        assert data["runtMode"] in ("mock", "real")
        assert "timestamp" in data

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Briki API"
        assert "version" in data
        assert "docs" in data


class TestPlanEndpoints:
    """Tests for the plan comparison endpoints."""

    def test_filter(self, client, travel_plans_data):
        """Test filtering with camelCase criteria."""
        response = client.post("/api/plans/filter", json={
            "plans": travel_plans_data,
            "criteria": {"priceRange": [0, 100]},
        })
        assert response.status_code == 200

        data = response.json()
        assert data["count"] == 1
        assert data["activeFilters"] == 1
        assert data["results"][0]["id"] == "travel-basic-001"
        assert data["results"][0]["basePrice"] == 80

    def test_sort(self, client, travel_plans_data):
        """Test sorting by ascending price."""
        response = client.post("/api/plans/sort", json={
            "plans": travel_plans_data,
            "sort": "price-low",
        })
        assert response.status_code == 200

        data = response.json()
        assert [plan["basePrice"] for plan in data["results"]] == [80, 120, 200, 300]
        assert data["sort"] == "price-low"

    def test_sort_rejects_unknown_option(self, client, travel_plans_data):
        """Test that the API validates the sort option."""
        response = client.post("/api/plans/sort", json={
            "plans": travel_plans_data,
            "sort": "cheapest",
        })
        assert response.status_code == 422

    def test_plan_requires_name(self, client):
        """Test that malformed plans are rejected."""
        response = client.post("/api/plans/filter", json={
            "plans": [{"id": "x", "category": "travel"}],
        })
        assert response.status_code == 422

    def test_search(self, client, travel_plans_data):
        """Test filter then sort in one call."""
        response = client.post("/api/plans/search", json={
            "plans": travel_plans_data,
            "criteria": {"providers": ["SURA"]},
            "sort": "price-high",
        })
        assert response.status_code == 200
        assert [p["id"] for p in response.json()["results"]] == [
            "travel-family-001", "travel-basic-001"
        ]

    def test_options(self, client, travel_plans_data):
        """Test the filter panel options."""
        response = client.post("/api/plans/options", json={"plans": travel_plans_data})
        assert response.status_code == 200
        assert response.json()["providers"] == ["AXA", "Allianz", "SURA"]

    def test_score(self, client, travel_plans_data):
        """Test scores keyed by plan id."""
        response = client.post("/api/plans/score", json={"plans": travel_plans_data})
        assert response.status_code == 200

        scores = response.json()["scores"]
        assert set(scores) == {p["id"] for p in travel_plans_data}
        assert scores["travel-latam-001"] > scores["travel-basic-001"]

    def test_insights(self, client, travel_plans_data, analytics_repository):
        """Test insights with supplied analytics."""
        response = client.post("/api/plans/insights", json={
            "plans": travel_plans_data,
            "analytics": {"travel-basic-001": {"viewCount": 10, "selectionCount": 9}},
        })
        assert response.status_code == 200

        insights = response.json()["insights"]
        assert [i["type"] for i in insights["travel-basic-001"]] == ["most-popular", "budget-friendly"]
        analytics_repository.get_analytics.assert_not_called()

    def test_insights_use_stored_analytics(self, client, travel_plans_data, analytics_repository):
        """Test that stored counters are used when none are supplied."""
        analytics_repository.get_analytics.return_value = {
            "travel-premium-001": PlanAnalytics(view_count=20, selection_count=10),
        }
        response = client.post("/api/plans/insights", json={"plans": travel_plans_data})
        assert response.status_code == 200

        insights = response.json()["insights"]
        assert "most-popular" in [i["type"] for i in insights["travel-premium-001"]]
        analytics_repository.get_analytics.assert_called_once()

    def test_recommend(self, client, travel_plans_data):
        """Test preference-based recommendations."""
        response = client.post("/api/plans/recommend", json={
            "plans": travel_plans_data,
            "criteria": {
                "maxResults": 2,
                "userPreferences": {"preferredProviders": ["AXA"], "mustHaveFeatures": ["deportes"]},
            },
        })
        assert response.status_code == 200
        assert response.json()["results"][0]["id"] == "travel-premium-001"

    def test_track_interaction(self, client, analytics_repository):
        """Test that interactions are recorded."""
        response = client.post("/api/plans/travel-basic-001/interactions", json={"action": "view"})
        assert response.status_code == 204
        analytics_repository.track_interaction.assert_called_once_with("travel-basic-001", "view")

    def test_track_unknown_interaction(self, client, analytics_repository):
        """Test that invalid actions return 400."""
        analytics_repository.track_interaction.side_effect = ValueError("Unknown interaction")
        response = client.post("/api/plans/travel-basic-001/interactions", json={"action": "buy"})
        assert response.status_code == 400


class TestAssistantEndpoints:
    """Tests for chat context endpoints."""

    def test_extract_without_session(self, client):
        """Test one-off extraction."""
        response = client.post("/api/assistant/context", json={"message": "voy a europa por 2 semanas"})
        assert response.status_code == 200

        data = response.json()
        assert data["context"] == {"travel": {"destination": "Europa", "duration": "2 semanas"}}
        assert data["summary"] == "Viaje: Europa por 2 semanas"
        assert data["isGreeting"] is False

    def test_session_accumulates(self, client):
        """Test that a session remembers earlier messages."""
        client.post("/api/assistant/context", json={"message": "vivo en cali", "sessionId": "s1"})
        response = client.post(
            "/api/assistant/context",
            json={"message": "tengo un perro golden", "sessionId": "s1"},
        )
        data = response.json()
        assert data["context"]["location"]["city"] == "Cali"
        assert data["context"]["pet"]["breed"] == "Golden Retriever"
        assert data["sessionId"] == "s1"

    def test_greeting(self, client):
        """Test greeting and intent flags."""
        data = client.post("/api/assistant/context", json={"message": "hola"}).json()
        assert data["isGreeting"] is True
        assert data["hasInsuranceIntent"] is False

    def test_empty_message_rejected(self, client):
        """Test that an empty message is a validation error."""
        response = client.post("/api/assistant/context", json={"message": ""})
        assert response.status_code == 422

    def test_clear_context(self, client):
        """Test deleting a session context."""
        client.post("/api/assistant/context", json={"message": "voy a asia", "sessionId": "s2"})
        assert client.delete("/api/assistant/context/s2").status_code == 204

        data = client.post(
            "/api/assistant/context", json={"message": "hola", "sessionId": "s2"}
        ).json()
        assert data["context"] == {}


class TestVehicleEndpoints:
    """Tests for RUNT lookups."""

    def test_lookup(self, client):
        """Test a mock lookup with a lower-case plate."""
        response = client.get("/api/vehicles/abc123")
        assert response.status_code == 200

        data = response.json()
        assert data["plate"] == "ABC123"
        assert data["source"] == "mock"

    def test_invalid_plate(self, client):
        """Test that malformed plates return 400."""
        assert client.get("/api/vehicles/123").status_code == 400

    def test_not_found(self, client, mocker):
        """Test that unknown plates return 404."""
        from briki.core.runt_client import VehicleNotFoundError

        runt = mocker.MagicMock()
        runt.get_vehicle.side_effect = VehicleNotFoundError("No vehicle registered")
        app.dependency_overrides[get_runt_client] = lambda: runt

        assert client.get("/api/vehicles/ABC123").status_code == 404

    def test_bad_upstream_payload(self, client, mocker):
        """Test that an incomplete RUNT response returns 502."""
        session = mocker.MagicMock()
        response = mocker.MagicMock(status_code=200, ok=True)
        response.json.return_value = {"brand": "Mazda"}
        session.get.return_value = response
        settings = Settings(use_mock_runt=False, runt_api_url="https://runt.example.com", runt_api_key="key")
        app.dependency_overrides[get_runt_client] = lambda: RuntClient(settings, session=session)

        response = client.get("/api/vehicles/ABC123")
        assert response.status_code == 502
        assert "Invalid vehicle data" in response.json()["detail"]

    def test_error_responses_documented(self, client):
        """Test that lookup failures are described in the OpenAPI schema."""
        schema = client.get("/openapi.json").json()
        responses = schema["paths"]["/api/vehicles/{plate}"]["get"]["responses"]

        for code in ("400", "404", "502"):
            assert responses[code]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")

    def test_error_body_matches_schema(self, client):
        """Test that error bodies carry the documented detail field."""
        data = client.get("/api/vehicles/123").json()
        assert set(data) == {"detail"}
        assert "Invalid license plate" in data["detail"]
