"""
Plan ordering.
Every mode uses Python's stable sort, so plans with equal keys keep
their input order.
"""

import logging
from typing import List, Sequence, Union

from briki.plans.models import InsurancePlan, SortOption
from briki.plans.scoring import calculate_recommendation_score, has_tag


logger = logging.getLogger(__name__)


def _resolve_mode(mode: Union[SortOption, str, None]) -> SortOption:
    if isinstance(mode, SortOption):
        return mode
    try:
        return SortOption(mode)
    except ValueError:
        logger.warning(f"Unknown sort option {mode!r}, falling back to recommended")
        return SortOption.RECOMMENDED


def apply_sort(
    plans: Sequence[InsurancePlan],
    mode: Union[SortOption, str, None] = SortOption.RECOMMENDED,
) -> List[InsurancePlan]:
    """
    Order plans according to a sort option.

    Args:
        plans: Plans to order (left untouched)
        mode: SortOption or its string value; unknown values mean "recommended"

    Returns:
        New list holding a permutation of the input
    """
    mode = _resolve_mode(mode)

    if mode == SortOption.PRICE_LOW:
        return sorted(plans, key=lambda p: p.base_price)

    if mode == SortOption.PRICE_HIGH:
        return sorted(plans, key=lambda p: p.base_price, reverse=True)

    if mode == SortOption.RATING:
        return sorted(plans, key=lambda p: p.rating, reverse=True)

    if mode == SortOption.COVERAGE_HIGH:
        return sorted(plans, key=lambda p: p.coverage_amount, reverse=True)

    if mode == SortOption.COVERAGE_LOW:
        return sorted(plans, key=lambda p: p.coverage_amount)

    if mode == SortOption.POPULAR:
        # Popular-tagged plans first, then by rating
        return sorted(plans, key=lambda p: (has_tag(p, "popular"), p.rating), reverse=True)

    return sorted(plans, key=calculate_recommendation_score, reverse=True)
