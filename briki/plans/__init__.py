"""
Plan comparison engine: filtering, sorting, scoring and insights.
"""

from .models import (
    InsuranceCategory,
    InsurancePlan,
    FilterCriteria,
    FilterOptions,
    SortOption,
    PlanAnalytics,
    PlanInsight,
    RelevanceCriteria,
    RelevancePreferences,
    PriceRangePreference,
)
from .filters import apply_filters, extract_filter_options, count_active_filters, default_filters
from .scoring import calculate_recommendation_score
from .sorting import apply_sort
from .insights import generate_plan_insights, generate_insights_for_plans
from .relevance import filter_plans_by_relevance, extract_common_features

__all__ = [
    "InsuranceCategory",
    "InsurancePlan",
    "FilterCriteria",
    "FilterOptions",
    "SortOption",
    "PlanAnalytics",
    "PlanInsight",
    "RelevanceCriteria",
    "RelevancePreferences",
    "PriceRangePreference",
    "apply_filters",
    "extract_filter_options",
    "count_active_filters",
    "default_filters",
    "calculate_recommendation_score",
    "apply_sort",
    "generate_plan_insights",
    "generate_insights_for_plans",
    "filter_plans_by_relevance",
    "extract_common_features",
]
