"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import Field

from briki.assistant.context import UserContext
from briki.plans.models import (
    CamelModel,
    FilterCriteria,
    InsurancePlan,
    PlanAnalytics,
    PlanInsight,
    RelevanceCriteria,
    SortOption,
)


class PlanListRequest(CamelModel):
    """A plan list supplied by the caller's catalog."""
    plans: List[InsurancePlan] = Field(default_factory=list)


class FilterRequest(PlanListRequest):
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)


class SortRequest(PlanListRequest):
    sort: SortOption = SortOption.RECOMMENDED


class SearchRequest(PlanListRequest):
    """Filter then sort in one call."""
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    sort: SortOption = SortOption.RECOMMENDED


class InsightsRequest(PlanListRequest):
    analytics: Dict[str, PlanAnalytics] = Field(default_factory=dict)


class RecommendRequest(PlanListRequest):
    criteria: RelevanceCriteria = Field(default_factory=RelevanceCriteria)


class InteractionRequest(CamelModel):
    action: str = Field(description="view, select or compare", examples=["view"])


class PlanListResponse(CamelModel):
    """Plans returned by the filter/sort endpoints."""
    results: List[InsurancePlan] = Field(default_factory=list)
    count: int = 0
    active_filters: Optional[int] = None
    sort: Optional[SortOption] = None


class ScoreResponse(CamelModel):
    scores: Dict[str, float] = Field(default_factory=dict)


class InsightsResponse(CamelModel):
    insights: Dict[str, List[PlanInsight]] = Field(default_factory=dict)


class ContextRequest(CamelModel):
    """A chat message to mine for context."""
    message: str = Field(..., min_length=1, examples=["voy a europa por 2 semanas"])
    session_id: Optional[str] = Field(
        default=None,
        description="When set, the stored context for this session is used and updated"
    )
    context: Optional[UserContext] = Field(
        default=None,
        description="Context to merge into when no session is given"
    )


class ContextResponse(CamelModel):
    context: UserContext
    summary: str = ""
    is_greeting: bool = False
    has_insurance_intent: bool = False
    session_id: Optional[str] = None


class HealthResponse(CamelModel):
    """Health check response."""
    status: str = Field(default="healthy")
    version: str
    context_store: str
    runt_mode: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(CamelModel):
    """Error body of a failed request."""
    detail: str = Field(examples=["Invalid license plate: '123'"])
