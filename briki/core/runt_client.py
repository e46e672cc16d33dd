"""
RUNT (Registro Unico Nacional de Transito) vehicle lookup.
Fetches vehicle details by Colombian license plate, either from the
RUNT API or from a deterministic mock used in development.
"""

import random
import re
import time
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Dict, List, Optional

import requests
from pydantic import BaseModel, Field, ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from briki.config import Settings, get_settings


logger = logging.getLogger(__name__)

# Cars: ABC123, motorcycles: ABC12D
PLATE_PATTERN = re.compile(r"^[A-Z]{3}\d{2}[A-Z0-9]$")

MOCK_MODELS: Dict[str, List[str]] = {
    "Mazda": ["3", "CX-5", "2"],
    "Toyota": ["Corolla", "Hilux", "RAV4"],
    "Chevrolet": ["Onix", "Spark", "Tracker"],
    "Nissan": ["Versa", "Kicks", "Frontier"],
    "Ford": ["Fiesta", "Ranger", "Explorer"],
    "Kia": ["Picanto", "Rio", "Sportage"],
    "Renault": ["Sandero", "Duster", "Logan"],
    "Hyundai": ["i10", "Accent", "Tucson"],
}
FUEL_TYPES = ["Gasolina", "Diesel", "Híbrido", "Eléctrico"]
MOCK_YEAR_RANGE = (2015, 2024)
MOCK_CC_RANGE = (1200, 3000)


class RuntError(Exception):
    """Base error for RUNT lookups."""


class InvalidPlateError(RuntError, ValueError):
    """The plate is not a valid Colombian license plate."""


class VehicleNotFoundError(RuntError):
    """RUNT has no vehicle registered under the plate."""


class RuntConfigurationError(RuntError):
    """Real RUNT mode is enabled but the API is not configured."""


class RuntLookupError(RuntError):
    """The RUNT API could not be reached or returned an error."""


class VehicleData(BaseModel):
    """Vehicle details returned by a RUNT lookup."""
    plate: str
    brand: str
    model: str
    year: int
    fuel: str
    cc: int = Field(description="Engine displacement in cubic centimetres")
    retrieved_at: datetime
    source: str = Field(default="runt", description="'runt' or 'mock'")


def normalize_plate(plate: str) -> str:
    """
    Upper-case a plate and strip separators.

    Raises:
        InvalidPlateError: if the result is not AAA999 or AAA99A
    """
    normalized = re.sub(r"[\s\-]", "", plate or "").upper()
    if not PLATE_PATTERN.match(normalized):
        raise InvalidPlateError(f"Invalid license plate: '{plate}'")
    return normalized


def generate_mock_vehicle(plate: str) -> VehicleData:
    """Build a plausible vehicle; the same plate always yields the same vehicle."""
    rng = random.Random(plate)
    brand = rng.choice(sorted(MOCK_MODELS))
    model = rng.choice(MOCK_MODELS[brand])

    return VehicleData(
        plate=plate,
        brand=brand,
        model=model,
        year=rng.randint(*MOCK_YEAR_RANGE),
        fuel=rng.choice(FUEL_TYPES),
        cc=rng.randint(*MOCK_CC_RANGE),
        retrieved_at=datetime.now(timezone.utc),
        source="mock",
    )


class RuntClient:
    """
    Looks up vehicles in RUNT.
    Switches between the mock and the real API based on settings.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    @property
    def mock_mode(self) -> bool:
        return self.settings.use_mock_runt

    def get_vehicle(self, plate: str) -> VehicleData:
        """
        Fetch vehicle data by license plate.

        Args:
            plate: License plate, separators and case are ignored

        Returns:
            VehicleData for the plate

        Raises:
            InvalidPlateError, VehicleNotFoundError, RuntConfigurationError, RuntLookupError
        """
        normalized = normalize_plate(plate)
        logger.info(f"Looking up plate: {normalized}. Mock mode: {self.mock_mode}")

        if self.mock_mode:
            if self.settings.runt_mock_delay_seconds > 0:
                time.sleep(self.settings.runt_mock_delay_seconds)
            return generate_mock_vehicle(normalized)

        return self._real_lookup(normalized)

    def _real_lookup(self, plate: str) -> VehicleData:
        api_url = self.settings.runt_api_url
        api_key = self.settings.runt_api_key
        if not api_url or not api_key:
            raise RuntConfigurationError("Missing RUNT_API_URL or RUNT_API_KEY environment variables")

        try:
            response = self._fetch(f"{api_url.rstrip('/')}/vehicles/{plate}", api_key)
        except requests.RequestException as e:
            logger.error(f"Error calling RUNT API: {e}")
            raise RuntLookupError(f"Failed to fetch vehicle data from RUNT: {e}") from e

        if response.status_code == 404:
            raise VehicleNotFoundError(f"No vehicle registered with plate {plate}")
        if not response.ok:
            raise RuntLookupError(f"RUNT API error: {response.status_code} {response.reason}")

        try:
            data = response.json()
            return VehicleData(
                plate=str(data.get("plate", plate)).upper(),
                brand=data["brand"],
                model=data["model"],
                year=data["year"],
                fuel=data["fuel"],
                cc=data["cc"],
                retrieved_at=datetime.now(timezone.utc),
                source="runt",
            )
        except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.error(f"Unexpected RUNT response for {plate}: {e}")
            raise RuntLookupError(f"Invalid vehicle data from RUNT: {e}") from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _fetch(self, url: str, api_key: str) -> requests.Response:
        return self.session.get(
            url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.settings.runt_timeout_seconds,
        )


@lru_cache()
def get_runt_client() -> RuntClient:
    """Get cached RUNT client instance."""
    return RuntClient()
