"""
Plan insights.
Compares each plan with its peers and attaches up to two badges
(best value, most popular, premium choice, budget friendly).
"""

from typing import Dict, List, Mapping, Optional, Sequence

from briki.plans.models import InsurancePlan, PlanAnalytics, PlanInsight


MAX_INSIGHTS = 2

BEST_VALUE_FACTOR = 1.2
POPULARITY_FACTOR = 1.15
PREMIUM_COVERAGE_FACTOR = 1.3
PREMIUM_RATING_FACTOR = 1.1
BUDGET_FACTOR = 0.8

_INSIGHTS = {
    "best-value": PlanInsight(
        type="best-value",
        label="Best Value",
        description="Excellent coverage-to-price ratio",
        color="bg-emerald-500",
        priority=1,
    ),
    "most-popular": PlanInsight(
        type="most-popular",
        label="Most Popular",
        description="Frequently chosen by our customers",
        color="bg-blue-500",
        priority=2,
    ),
    "premium-choice": PlanInsight(
        type="premium-choice",
        label="Premium Choice",
        description="Comprehensive coverage & high rating",
        color="bg-purple-500",
        priority=3,
    ),
    "budget-friendly": PlanInsight(
        type="budget-friendly",
        label="Budget Friendly",
        description="Great value for money",
        color="bg-orange-500",
        priority=4,
    ),
}


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_value_ratio(plan: InsurancePlan) -> float:
    """Coverage per unit of price; non-positive prices count as 1."""
    price = plan.base_price if plan.base_price > 0 else 1.0
    return plan.coverage_amount / price


def is_best_value(plan: InsurancePlan, all_plans: Sequence[InsurancePlan]) -> bool:
    avg_ratio = _mean([calculate_value_ratio(p) for p in all_plans])
    return calculate_value_ratio(plan) > avg_ratio * BEST_VALUE_FACTOR


def _selection_rate(analytics: PlanAnalytics) -> float:
    return analytics.selection_count / max(analytics.view_count, 1)


def is_most_popular(
    plan: InsurancePlan,
    all_plans: Sequence[InsurancePlan],
    analytics: Mapping[str, PlanAnalytics],
) -> bool:
    """Selection rate at least 15% above the average of the list."""
    empty = PlanAnalytics()
    plan_rate = _selection_rate(analytics.get(plan.id, empty))
    avg_rate = _mean([_selection_rate(analytics.get(p.id, empty)) for p in all_plans])
    return plan_rate > avg_rate * POPULARITY_FACTOR


def is_premium_choice(plan: InsurancePlan, all_plans: Sequence[InsurancePlan]) -> bool:
    avg_coverage = _mean([p.coverage_amount for p in all_plans])
    avg_rating = _mean([p.rating for p in all_plans])
    return (
        plan.coverage_amount > avg_coverage * PREMIUM_COVERAGE_FACTOR
        and plan.rating > avg_rating * PREMIUM_RATING_FACTOR
    )


def is_budget_friendly(plan: InsurancePlan, all_plans: Sequence[InsurancePlan]) -> bool:
    avg_price = _mean([p.base_price for p in all_plans])
    return plan.base_price < avg_price * BUDGET_FACTOR


def generate_plan_insights(
    plan: InsurancePlan,
    all_plans: Sequence[InsurancePlan],
    analytics: Optional[Mapping[str, PlanAnalytics]] = None,
) -> List[PlanInsight]:
    """
    Build the badges for one plan relative to the list it is shown in.

    Args:
        plan: Plan to describe
        all_plans: Peer plans (usually the current result list)
        analytics: Interaction counters by plan id; missing plans count as no activity

    Returns:
        At most MAX_INSIGHTS insights, highest priority first
    """
    if not all_plans:
        return []

    analytics = analytics or {}
    insights: List[PlanInsight] = []

    if is_best_value(plan, all_plans):
        insights.append(_INSIGHTS["best-value"])
    if is_most_popular(plan, all_plans, analytics):
        insights.append(_INSIGHTS["most-popular"])
    if is_premium_choice(plan, all_plans):
        insights.append(_INSIGHTS["premium-choice"])
    if is_budget_friendly(plan, all_plans):
        insights.append(_INSIGHTS["budget-friendly"])

    insights.sort(key=lambda insight: insight.priority)
    return [insight.model_copy() for insight in insights[:MAX_INSIGHTS]]


def generate_insights_for_plans(
    plans: Sequence[InsurancePlan],
    analytics: Optional[Mapping[str, PlanAnalytics]] = None,
) -> Dict[str, List[PlanInsight]]:
    """Insights for every plan of a list, keyed by plan id."""
    return {plan.id: generate_plan_insights(plan, plans, analytics) for plan in plans}
