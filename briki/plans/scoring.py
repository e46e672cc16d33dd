"""
Recommendation scoring.
Collapses rating, value for money and marketing tags into one number
used by the "recommended" ordering.
"""

import logging

from briki.plans.models import InsurancePlan


logger = logging.getLogger(__name__)

RATING_WEIGHT = 10.0
VALUE_RATIO_DIVISOR = 1000.0
MAX_VALUE_POINTS = 30.0

# (tag substring, bonus points)
TAG_BONUSES = (
    ("popular", 15.0),
    ("recomendado", 15.0),
    ("premium", 10.0),
)


def has_tag(plan: InsurancePlan, term: str) -> bool:
    """True when any tag contains the term, case-insensitively."""
    term = term.lower()
    return any(term in tag.lower() for tag in plan.tags)


def value_points(plan: InsurancePlan) -> float:
    """
    Coverage-to-price contribution, capped at MAX_VALUE_POINTS.
    Plans without a positive price get no value points.
    """
    if plan.base_price <= 0:
        logger.debug(f"Plan {plan.id} has non-positive price {plan.base_price}; skipping value term")
        return 0.0

    ratio = plan.coverage_amount / plan.base_price
    return min(ratio / VALUE_RATIO_DIVISOR, MAX_VALUE_POINTS)


def calculate_recommendation_score(plan: InsurancePlan) -> float:
    """
    Composite score for the "recommended" ordering.

    score = rating * 10
          + min(coverage / price / 1000, 30)
          + 15 if a tag contains "popular"
          + 15 if a tag contains "recomendado"
          + 10 if a tag contains "premium"
    """
    score = plan.rating * RATING_WEIGHT
    score += value_points(plan)

    for term, bonus in TAG_BONUSES:
        if has_tag(plan, term):
            score += bonus

    return score
