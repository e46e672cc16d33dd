"""
Plan filtering.
Narrows a plan list to the plans satisfying every user criterion.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from briki.plans.models import (
    DEFAULT_COVERAGE_RANGE,
    DEFAULT_DEDUCTIBLE_RANGE,
    DEFAULT_PRICE_RANGE,
    FilterCriteria,
    FilterOptions,
    InsurancePlan,
)


logger = logging.getLogger(__name__)


def _in_range(value: float, bounds: Tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


def _matches_all(required: Iterable[str], available: Sequence[str]) -> bool:
    """Every required term must be a case-insensitive substring of some available entry."""
    lowered = [item.lower() for item in available]
    return all(
        any(term.lower() in item for item in lowered)
        for term in required
    )


def plan_matches(plan: InsurancePlan, criteria: FilterCriteria) -> bool:
    """Check a single plan against all criteria, stopping at the first failure."""
    if not _in_range(plan.base_price, criteria.price_range):
        return False

    if not _in_range(plan.coverage_amount, criteria.coverage_range):
        return False

    if not _in_range(plan.deductible, criteria.deductible_range):
        return False

    if plan.rating < criteria.rating:
        return False

    if criteria.providers and plan.provider not in criteria.providers:
        return False

    if criteria.features and not _matches_all(criteria.features, plan.features):
        return False

    if criteria.tags and not _matches_all(criteria.tags, plan.tags):
        return False

    return True


def apply_filters(plans: Sequence[InsurancePlan], criteria: FilterCriteria) -> List[InsurancePlan]:
    """
    Keep the plans satisfying every criterion.

    Args:
        plans: Plans to filter
        criteria: User-selected constraints

    Returns:
        Order-preserving subsequence of the input
    """
    results = [plan for plan in plans if plan_matches(plan, criteria)]
    logger.debug(f"Filtered {len(plans)} plans down to {len(results)}")
    return results


def extract_filter_options(plans: Sequence[InsurancePlan]) -> FilterOptions:
    """Collect the sorted, de-duplicated providers, features and tags of a plan list."""
    providers = {plan.provider for plan in plans if plan.provider}
    features = {feature for plan in plans for feature in plan.features if feature}
    tags = {tag for plan in plans for tag in plan.tags if tag}

    return FilterOptions(
        providers=sorted(providers),
        features=sorted(features),
        tags=sorted(tags),
    )


def _range_is_narrowed(bounds: Tuple[float, float], default: Tuple[float, float]) -> bool:
    return bounds[0] > default[0] or bounds[1] < default[1]


def count_active_filters(criteria: FilterCriteria) -> int:
    """Count the criteria that differ from the defaults (for the filter badge)."""
    count = 0

    if _range_is_narrowed(criteria.price_range, DEFAULT_PRICE_RANGE):
        count += 1
    if _range_is_narrowed(criteria.coverage_range, DEFAULT_COVERAGE_RANGE):
        count += 1
    if _range_is_narrowed(criteria.deductible_range, DEFAULT_DEDUCTIBLE_RANGE):
        count += 1

    if criteria.rating > 0:
        count += 1

    # List filters
    if criteria.providers:
        count += 1
    if criteria.features:
        count += 1
    if criteria.tags:
        count += 1

    return count


def default_filters() -> FilterCriteria:
    """Return criteria that exclude nothing inside the default ranges."""
    return FilterCriteria()
