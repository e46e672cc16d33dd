"""
Pydantic models for the plan comparison engine.
These models define the plan records and the criteria passed between
the filter, sort and insight functions.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from briki.utils.parsing import parse_number


DEFAULT_PRICE_RANGE: Tuple[float, float] = (0.0, 1000.0)
DEFAULT_COVERAGE_RANGE: Tuple[float, float] = (0.0, 100000.0)
DEFAULT_DEDUCTIBLE_RANGE: Tuple[float, float] = (0.0, 1000.0)


class CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InsuranceCategory(str, Enum):
    """Insurance lines offered in the marketplace."""
    TRAVEL = "travel"
    AUTO = "auto"
    PET = "pet"
    HEALTH = "health"


class SortOption(str, Enum):
    """Orderings available for a plan list."""
    RECOMMENDED = "recommended"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    COVERAGE_HIGH = "coverage-high"
    COVERAGE_LOW = "coverage-low"
    POPULAR = "popular"


class InsurancePlan(CamelModel):
    """A single insurance product as supplied by the plan catalog."""
    id: str = Field(description="Identifier, unique within a category")
    category: InsuranceCategory
    provider: str = Field(default="", description="Insurer offering the plan")
    name: str
    base_price: float = Field(default=0.0, description="Premium in the plan currency")
    coverage_amount: float = Field(default=0.0, description="Primary coverage ceiling")
    rating: float = Field(default=0.0, description="Customer rating, 0-5")
    features: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    deductible: float = Field(default=0.0)
    price_unit: Optional[str] = Field(default=None, description="'monthly' or 'annual'")
    currency: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if value is not None else value

    @field_validator("provider", mode="before")
    @classmethod
    def _coerce_provider(cls, value):
        return value or ""

    @field_validator("rating", "base_price", "coverage_amount", "deductible", mode="before")
    @classmethod
    def _parse_numeric(cls, value):
        return parse_number(value)

    @field_validator("features", "tags", mode="before")
    @classmethod
    def _drop_empty(cls, value):
        if value is None:
            return []
        return [item for item in value if item]


class FilterCriteria(CamelModel):
    """User-selected constraints used to narrow a plan list. Ranges are inclusive."""
    price_range: Tuple[float, float] = DEFAULT_PRICE_RANGE
    coverage_range: Tuple[float, float] = DEFAULT_COVERAGE_RANGE
    deductible_range: Tuple[float, float] = DEFAULT_DEDUCTIBLE_RANGE
    rating: float = Field(default=0.0, description="Minimum acceptable rating")
    providers: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class FilterOptions(CamelModel):
    """Universe of selectable filter values derived from a plan list."""
    providers: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class PlanAnalytics(CamelModel):
    """Interaction counters for a plan."""
    view_count: int = 0
    selection_count: int = 0
    compare_count: int = 0
    last_updated: Optional[datetime] = None


class PlanInsight(CamelModel):
    """A badge highlighting why a plan stands out from its peers."""
    type: str = Field(description="best-value, most-popular, premium-choice or budget-friendly")
    label: str
    description: str
    color: str
    priority: int


class PriceRangePreference(CamelModel):
    """Price band the user is comfortable with."""
    min: float
    max: float
    currency: str = "COP"
    is_monthly: bool = True


class RelevancePreferences(CamelModel):
    """Soft preferences used to score plan relevance."""
    preferred_providers: List[str] = Field(default_factory=list)
    must_have_features: List[str] = Field(default_factory=list)
    price_range: Optional[PriceRangePreference] = None


class RelevanceCriteria(CamelModel):
    """Options for preference-based plan selection."""
    max_results: int = Field(default=4, ge=1)
    relevance_threshold: float = Field(default=0.3, ge=0, le=1)
    user_preferences: Optional[RelevancePreferences] = None
