"""
Pytest configuration and fixtures.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from briki.plans.models import InsurancePlan


@pytest.fixture
def make_plan():
    """Factory for plans with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"plan-{counter['n']:03d}",
            "category": "travel",
            "provider": "SURA",
            "name": f"Plan {counter['n']}",
            "basePrice": 100,
            "coverageAmount": 50000,
            "rating": 4.0,
            "features": [],
            "tags": [],
        }
        data.update(overrides)
        return InsurancePlan.model_validate(data)

    return _make


@pytest.fixture
def travel_plans_data():
    """Raw travel catalog entries, as the catalog loader would supply them."""
    return [
        {
            "id": "travel-basic-001",
            "category": "travel",
            "provider": "SURA",
            "name": "Plan Básico",
            "basePrice": 80,
            "coverageAmount": 30000,
            "rating": "4.2",
            "features": ["Asistencia médica", "Equipaje perdido"],
            "tags": ["Económico"],
            "deductible": 0,
        },
        {
            "id": "travel-latam-001",
            "category": "travel",
            "provider": "Allianz",
            "name": "Latam Plus",
            "basePrice": 120,
            "coverageAmount": 50000,
            "rating": 4.5,
            "features": ["Asistencia médica 24/7", "Cancelación de viaje"],
            "tags": ["Most Popular", "Recomendado"],
            "deductible": 100,
        },
        {
            "id": "travel-premium-001",
            "category": "travel",
            "provider": "AXA",
            "name": "Premium Global",
            "basePrice": 300,
            "coverageAmount": 100000,
            "rating": "4.8",
            "features": ["Asistencia médica", "Cancelación de viaje", "Deportes extremos"],
            "tags": ["Premium"],
            "deductible": 250,
        },
        {
            "id": "travel-family-001",
            "category": "travel",
            "provider": "SURA",
            "name": "Familia Segura",
            "basePrice": 200,
            "coverageAmount": 80000,
            "rating": 4.0,
            "features": ["Asistencia médica", "Cobertura familiar"],
            "tags": ["Familiar"],
            "deductible": None,
        },
    ]


@pytest.fixture
def travel_plans(travel_plans_data):
    """Validated travel plans."""
    return [InsurancePlan.model_validate(item) for item in travel_plans_data]


@pytest.fixture
def mock_mongodb(mocker):
    """Mock the MongoDB collection used by the stores."""
    mock_collection = mocker.MagicMock()
    mock_collection.find.return_value = iter([])
    mock_collection.find_one.return_value = None

    mocker.patch('briki.plans.analytics.get_collection', return_value=mock_collection)
    mocker.patch('briki.assistant.memory.get_collection', return_value=mock_collection)

    return mock_collection
