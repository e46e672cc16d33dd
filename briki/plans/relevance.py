"""
Preference-based plan selection.
Scores plans against soft user preferences (providers, must-have
features, monthly budget) and keeps the most relevant few.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence

from briki.plans.models import InsurancePlan, RelevanceCriteria
from briki.utils.parsing import round_half_up


logger = logging.getLogger(__name__)

PROVIDER_WEIGHT = 0.3
FEATURE_WEIGHT = 0.4
PRICE_WEIGHT = 0.3
COMMON_FEATURE_SHARE = 0.2


def monthly_price(plan: InsurancePlan) -> float:
    """Monthly premium; prices are annual unless the plan says otherwise."""
    if plan.price_unit == "monthly":
        return plan.base_price
    return float(round_half_up(plan.base_price / 12))


def annual_price(plan: InsurancePlan) -> float:
    if plan.price_unit == "monthly":
        return plan.base_price * 12
    return plan.base_price


def _price_fit(price: float, low: float, high: float) -> float:
    """1.0 inside the band, decreasing linearly with the distance outside it."""
    if low <= price <= high:
        return 1.0
    distance = low - price if price < low else price - high
    width = high - low
    if width <= 0:
        return 0.0
    return 1.0 - min(distance / width, 1.0)


def calculate_plan_relevance(plan: InsurancePlan, criteria: RelevanceCriteria) -> float:
    """Relevance in [0, 1]; plans score 1 when no preferences were given."""
    preferences = criteria.user_preferences
    if preferences is None:
        return 1.0

    score = 0.0

    if plan.provider in preferences.preferred_providers:
        score += PROVIDER_WEIGHT

    required = preferences.must_have_features
    if required:
        plan_features = [feature.lower() for feature in plan.features]
        matched = [
            feature for feature in required
            if any(feature.lower() in plan_feature for plan_feature in plan_features)
        ]
        score += FEATURE_WEIGHT * (len(matched) / len(required))
    else:
        score += FEATURE_WEIGHT

    band = preferences.price_range
    if band is None:
        score += PRICE_WEIGHT
    else:
        price = monthly_price(plan) if band.is_monthly else annual_price(plan)
        score += PRICE_WEIGHT * _price_fit(price, band.min, band.max)

    return score


def filter_plans_by_relevance(
    plans: Sequence[InsurancePlan],
    criteria: Optional[RelevanceCriteria] = None,
) -> List[InsurancePlan]:
    """
    Select the plans that best match the user's preferences.

    Without preferred providers or must-have features the first
    max_results plans are returned as-is.
    """
    criteria = criteria or RelevanceCriteria()
    preferences = criteria.user_preferences

    if preferences is None or (
        not preferences.preferred_providers and not preferences.must_have_features
    ):
        return list(plans[:criteria.max_results])

    scored = [(plan, calculate_plan_relevance(plan, criteria)) for plan in plans]
    kept = [item for item in scored if item[1] >= criteria.relevance_threshold]
    kept.sort(key=lambda item: item[1], reverse=True)

    logger.debug(
        f"{len(kept)} of {len(plans)} plans above relevance threshold "
        f"{criteria.relevance_threshold}"
    )
    return [plan for plan, _ in kept[:criteria.max_results]]


def extract_common_features(plans: Sequence[InsurancePlan]) -> List[str]:
    """Lower-cased features appearing in at least 20% of the plans (minimum once)."""
    frequency: Counter = Counter()
    for plan in plans:
        for feature in plan.features:
            frequency[feature.lower()] += 1

    min_occurrence = max(1, int(len(plans) * COMMON_FEATURE_SHARE))
    return [feature for feature, count in frequency.items() if count >= min_occurrence]
