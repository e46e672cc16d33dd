"""
Chat context extraction.
Scans free-text user messages for keywords and merges the discovered
facts into a UserContext used to pre-fill forms and steer the assistant.
"""

import logging
import re
from typing import Any, Dict, List, Literal, Mapping, Optional

from briki.assistant import patterns
from briki.assistant.patterns import PatternTable
from briki.plans.models import CamelModel


logger = logging.getLogger(__name__)

ContextUpdates = Dict[str, Dict[str, Any]]


class LocationContext(CamelModel):
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None


class AutoContext(CamelModel):
    type: Optional[Literal["car", "motorcycle", "scooter"]] = None
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    usage: Optional[Literal["personal", "commercial", "ridesharing"]] = None


class TravelContext(CamelModel):
    destination: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[str] = None
    travelers: Optional[int] = None
    purpose: Optional[str] = None


class PetContext(CamelModel):
    type: Optional[Literal["dog", "cat", "other"]] = None
    breed: Optional[str] = None
    age: Optional[int] = None
    conditions: Optional[List[str]] = None


class HealthContext(CamelModel):
    age: Optional[int] = None
    family_members: Optional[int] = None
    pre_existing_conditions: Optional[List[str]] = None
    previous_coverage: Optional[bool] = None


class PreferencesContext(CamelModel):
    budget: Optional[Literal["low", "medium", "high"]] = None
    coverage_level: Optional[Literal["basic", "standard", "premium"]] = None
    payment_frequency: Optional[Literal["monthly", "yearly"]] = None


class UserContext(CamelModel):
    """Facts inferred from the conversation; every section is optional."""
    location: Optional[LocationContext] = None
    auto: Optional[AutoContext] = None
    travel: Optional[TravelContext] = None
    pet: Optional[PetContext] = None
    health: Optional[HealthContext] = None
    preferences: Optional[PreferencesContext] = None


SECTIONS = tuple(UserContext.model_fields)


# -----------------------------
# Merging
# -----------------------------
def _merge_section(existing: Dict[str, Any], partial: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(existing)
    for key, value in partial.items():
        if value is None:
            continue
        if isinstance(value, list) and isinstance(merged.get(key), list):
            # Accumulate list facts (conditions) without duplicates
            merged[key] = merged[key] + [item for item in value if item not in merged[key]]
        elif isinstance(value, list):
            merged[key] = list(value)
        else:
            merged[key] = value
    return merged


def merge_context(context: Optional[UserContext], updates: Mapping[str, Mapping[str, Any]]) -> UserContext:
    """
    Shallow-merge partial sections into a context, returning a new UserContext.
    Scalar keys are overwritten (last write wins); list keys are extended.

    Raises:
        ValueError: for an unknown section name
    """
    data = context.model_dump(exclude_none=True) if context else {}
    for section, partial in updates.items():
        if section not in SECTIONS:
            raise ValueError(f"Unknown context section '{section}'")
        if not partial:
            continue
        data[section] = _merge_section(data.get(section, {}), partial)
    return UserContext.model_validate(data)


# -----------------------------
# Detection
# -----------------------------
def _apply_table(table: PatternTable, text: str, partial: Dict[str, Any]) -> bool:
    matched = False
    for pattern, values in table:
        if pattern.search(text):
            partial.update(_merge_section(partial, values))
            matched = True
    return matched


def _detect_location(text: str, updates: ContextUpdates) -> None:
    partial: Dict[str, Any] = {}
    if _apply_table(patterns.LOCATION_PATTERNS, text, partial):
        updates["location"] = partial


def _detect_vehicle(text: str, updates: ContextUpdates, context: UserContext) -> None:
    partial: Dict[str, Any] = {}
    found = _apply_table(patterns.VEHICLE_MAKE_PATTERNS, text, partial)
    found = _apply_table(patterns.VEHICLE_MODEL_PATTERNS, text, partial) or found
    found = _apply_table(patterns.VEHICLE_TYPE_PATTERNS, text, partial) or found

    if found or context.auto is not None:
        _apply_table(patterns.VEHICLE_USAGE_PATTERNS, text, partial)
        year = patterns.VEHICLE_YEAR_PATTERN.search(text)
        if year:
            partial["year"] = int(year.group(1))

    if partial:
        updates["auto"] = partial


def _format_duration(amount: int, unit: str) -> str:
    unit = unit.lower()
    if unit.startswith("d"):
        label = "día" if amount == 1 else "días"
    elif unit.startswith("s"):
        label = "semana" if amount == 1 else "semanas"
    else:
        label = "mes" if amount == 1 else "meses"
    return f"{amount} {label}"


def _detect_travel(text: str, updates: ContextUpdates, context: UserContext) -> None:
    partial: Dict[str, Any] = {}
    has_destination = _apply_table(patterns.TRAVEL_DESTINATION_PATTERNS, text, partial)
    traveling = (
        has_destination
        or context.travel is not None
        or patterns.TRAVEL_CUE_PATTERN.search(text) is not None
    )

    if traveling:
        duration = patterns.TRAVEL_DURATION_PATTERN.search(text)
        if duration:
            partial["duration"] = _format_duration(int(duration.group(1)), duration.group(2))

        travelers = patterns.TRAVELERS_PATTERN.search(text)
        if travelers:
            partial["travelers"] = int(travelers.group(1))

        start = patterns.TRAVEL_DATE_PATTERN.search(text)
        if start:
            partial["start_date"] = f"{int(start.group(1))} de {start.group(2).lower()}"

        _apply_table(patterns.TRAVEL_PURPOSE_PATTERNS, text, partial)

    if partial:
        updates["travel"] = partial


def _detect_pet(text: str, updates: ContextUpdates, context: UserContext) -> None:
    partial: Dict[str, Any] = {}
    found = _apply_table(patterns.PET_PATTERNS, text, partial)

    # Ages only make sense once we know there is a pet
    if found or context.pet is not None:
        age = patterns.PET_AGE_PATTERN.search(text)
        if age:
            partial["age"] = int(age.group(1))

    if partial:
        updates["pet"] = partial


def _detect_health(text: str, updates: ContextUpdates) -> None:
    partial: Dict[str, Any] = {}
    _apply_table(patterns.HEALTH_CONDITION_PATTERNS, text, partial)

    age = patterns.PERSON_AGE_PATTERN.search(text)
    if age:
        partial["age"] = int(age.group(1))

    family = patterns.FAMILY_SIZE_PATTERN.search(text)
    if family:
        partial["family_members"] = int(family.group(1))

    if patterns.HEALTH_COVERAGE_PATTERN.search(text):
        partial["previous_coverage"] = True

    if partial:
        updates["health"] = partial


def _detect_preferences(text: str, updates: ContextUpdates) -> None:
    partial: Dict[str, Any] = {}
    if _apply_table(patterns.PREFERENCE_PATTERNS, text, partial):
        updates["preferences"] = partial


def extract_context(message: str, current_context: Optional[UserContext] = None) -> UserContext:
    """
    Merge the facts found in a message into a copy of the current context.

    Args:
        message: Raw user message
        current_context: Context accumulated so far (not modified)

    Returns:
        New UserContext with the detected sections merged in
    """
    context = current_context or UserContext()
    text = (message or "").lower()

    updates: ContextUpdates = {}
    _detect_location(text, updates)
    _detect_vehicle(text, updates, context)
    _detect_travel(text, updates, context)
    _detect_pet(text, updates, context)
    _detect_health(text, updates)
    _detect_preferences(text, updates)

    if updates:
        logger.debug(f"Context updates from message: {updates}")
    return merge_context(context, updates)


# -----------------------------
# Message classification
# -----------------------------
def is_generic_greeting(message: str) -> bool:
    """True for a bare greeting ("hola", "buenas tardes!"), false for longer requests."""
    clean = (message or "").lower().strip()
    if clean in patterns.GREETINGS:
        return True
    if len(clean) >= patterns.GREETING_MAX_LENGTH:
        return False
    return any(_contains_word(clean, greeting) for greeting in patterns.GREETINGS)


def _contains_word(text: str, phrase: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", text) is not None


def has_insurance_intent(message: str) -> bool:
    clean = (message or "").lower()
    return any(keyword in clean for keyword in patterns.INSURANCE_INTENT_KEYWORDS)


def format_user_context(context: UserContext) -> str:
    """One-line Spanish summary of the known context."""
    items: List[str] = []

    if context.location and context.location.country:
        location = context.location.country
        if context.location.city:
            location = f"{context.location.city}, {context.location.country}"
        items.append(f"Ubicación: {location}")

    if context.auto and context.auto.type:
        vehicle = "Moto/Scooter" if context.auto.type in ("motorcycle", "scooter") else "Auto"
        make = f" {context.auto.make}" if context.auto.make else ""
        items.append(f"Vehículo: {vehicle}{make}")

    if context.travel and context.travel.destination:
        duration = f" por {context.travel.duration}" if context.travel.duration else ""
        items.append(f"Viaje: {context.travel.destination}{duration}")

    if context.pet and context.pet.type:
        pet = {"dog": "Perro", "cat": "Gato"}.get(context.pet.type, "Mascota")
        breed = f" {context.pet.breed}" if context.pet.breed else ""
        items.append(f"Mascota: {pet}{breed}")

    return ", ".join(items)
