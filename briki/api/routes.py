"""
API routes for the plan comparison engine, chat context and vehicle lookups.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Response

from briki import __version__
from briki.config import get_settings
from briki.assistant.context import (
    extract_context,
    format_user_context,
    has_insurance_intent,
    is_generic_greeting,
)
from briki.assistant.memory import ConversationMemory, get_conversation_memory
from briki.core.runt_client import (
    InvalidPlateError,
    RuntClient,
    RuntError,
    VehicleData,
    VehicleNotFoundError,
    get_runt_client,
)
from briki.plans.analytics import PlanAnalyticsRepository
from briki.plans.filters import apply_filters, count_active_filters, extract_filter_options
from briki.plans.insights import generate_insights_for_plans
from briki.plans.models import FilterOptions
from briki.plans.relevance import filter_plans_by_relevance
from briki.plans.scoring import calculate_recommendation_score
from briki.plans.sorting import apply_sort
from briki.api.schemas import (
    ContextRequest,
    ContextResponse,
    ErrorResponse,
    FilterRequest,
    HealthResponse,
    InsightsRequest,
    InsightsResponse,
    InteractionRequest,
    PlanListRequest,
    PlanListResponse,
    RecommendRequest,
    ScoreResponse,
    SearchRequest,
    SortRequest,
)


logger = logging.getLogger(__name__)
router = APIRouter()


def _errors(*status_codes: int) -> dict:
    return {code: {"model": ErrorResponse} for code in status_codes}


def get_analytics_repository() -> PlanAnalyticsRepository:
    return PlanAnalyticsRepository()


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Check the health status of the API and its configuration.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        context_store=settings.context_store,
        runt_mode="mock" if settings.use_mock_runt else "real",
    )


# -----------------------------
# Plans
# -----------------------------
@router.post(
    "/api/plans/filter",
    response_model=PlanListResponse,
    tags=["Plans"],
    summary="Filter plans",
    description="Keep the plans that satisfy every filter criterion, preserving order"
)
async def filter_plans(request: FilterRequest):
    results = apply_filters(request.plans, request.criteria)
    return PlanListResponse(
        results=results,
        count=len(results),
        active_filters=count_active_filters(request.criteria),
    )


@router.post(
    "/api/plans/sort",
    response_model=PlanListResponse,
    tags=["Plans"],
    summary="Sort plans",
)
async def sort_plans(request: SortRequest):
    results = apply_sort(request.plans, request.sort)
    return PlanListResponse(results=results, count=len(results), sort=request.sort)


@router.post(
    "/api/plans/search",
    response_model=PlanListResponse,
    tags=["Plans"],
    summary="Filter and sort plans",
)
async def search_plans(request: SearchRequest):
    filtered = apply_filters(request.plans, request.criteria)
    results = apply_sort(filtered, request.sort)
    logger.info(
        f"Search returned {len(results)} of {len(request.plans)} plans "
        f"(sort={request.sort.value})"
    )
    return PlanListResponse(
        results=results,
        count=len(results),
        active_filters=count_active_filters(request.criteria),
        sort=request.sort,
    )


@router.post("/api/plans/options", response_model=FilterOptions, tags=["Plans"])
async def filter_options(request: PlanListRequest):
    """Selectable providers, features and tags for the filter panel."""
    return extract_filter_options(request.plans)


@router.post("/api/plans/score", response_model=ScoreResponse, tags=["Plans"])
async def score_plans(request: PlanListRequest):
    """Recommendation score of every plan, keyed by plan id."""
    return ScoreResponse(
        scores={plan.id: calculate_recommendation_score(plan) for plan in request.plans}
    )


@router.post("/api/plans/insights", response_model=InsightsResponse, tags=["Plans"])
def plan_insights(
    request: InsightsRequest,
    repository: PlanAnalyticsRepository = Depends(get_analytics_repository),
):
    """
    Badges for every plan of the list.
    Stored interaction counters are used when the request carries none.
    """
    analytics = request.analytics
    if not analytics:
        analytics = repository.get_analytics(plan.id for plan in request.plans)
    return InsightsResponse(insights=generate_insights_for_plans(request.plans, analytics))


@router.post(
    "/api/plans/recommend",
    response_model=PlanListResponse,
    tags=["Plans"],
    summary="Recommend plans from user preferences",
)
async def recommend_plans(request: RecommendRequest):
    results = filter_plans_by_relevance(request.plans, request.criteria)
    return PlanListResponse(results=results, count=len(results))


@router.post(
    "/api/plans/{plan_id}/interactions",
    status_code=204,
    tags=["Plans"],
    summary="Track a plan view, selection or comparison",
    responses=_errors(400, 500),
)
def track_interaction(
    plan_id: str,
    request: InteractionRequest,
    repository: PlanAnalyticsRepository = Depends(get_analytics_repository),
):
    try:
        repository.track_interaction(plan_id, request.action)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error tracking interaction: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)


# -----------------------------
# Chat assistant
# -----------------------------
@router.post(
    "/api/assistant/context",
    response_model=ContextResponse,
    response_model_exclude_none=True,
    tags=["Assistant"],
    summary="Extract user context from a chat message",
    responses=_errors(500),
)
def update_context(
    request: ContextRequest,
    memory: ConversationMemory = Depends(get_conversation_memory),
):
    try:
        if request.session_id:
            context = memory.process_message(request.session_id, request.message)
        else:
            context = extract_context(request.message, request.context)

        return ContextResponse(
            context=context,
            summary=format_user_context(context),
            is_greeting=is_generic_greeting(request.message),
            has_insurance_intent=has_insurance_intent(request.message),
            session_id=request.session_id,
        )

    except Exception as e:
        logger.exception(f"Error extracting context: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete(
    "/api/assistant/context/{session_id}",
    status_code=204,
    tags=["Assistant"],
    responses=_errors(500),
)
def clear_context(
    session_id: str,
    memory: ConversationMemory = Depends(get_conversation_memory),
):
    try:
        memory.clear_context(session_id)
    except Exception as e:
        logger.exception(f"Error clearing context: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return Response(status_code=204)


# -----------------------------
# Vehicles
# -----------------------------
@router.get(
    "/api/vehicles/{plate}",
    response_model=VehicleData,
    tags=["Vehicles"],
    summary="Look up a vehicle in RUNT by license plate",
    responses=_errors(400, 404, 502),
)
def get_vehicle(plate: str, runt: RuntClient = Depends(get_runt_client)):
    try:
        return runt.get_vehicle(plate)
    except InvalidPlateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except VehicleNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntError as e:
        logger.error(f"RUNT lookup failed for {plate}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
