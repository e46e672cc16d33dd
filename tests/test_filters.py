"""
Tests for plan models and filtering.
"""

import pytest
from pydantic import ValidationError

from briki.plans.filters import (
    apply_filters,
    count_active_filters,
    default_filters,
    extract_filter_options,
    plan_matches,
)
from briki.plans.models import FilterCriteria, InsuranceCategory, InsurancePlan


class TestInsurancePlanModel:
    """Tests for catalog record parsing."""

    def test_numeric_strings_are_parsed(self, travel_plans):
        """Test that ratings supplied as strings become numbers."""
        assert travel_plans[0].rating == 4.2
        assert travel_plans[2].rating == 4.8

    def test_missing_deductible_defaults_to_zero(self, travel_plans):
        """Test that a null deductible is treated as 0."""
        assert travel_plans[3].deductible == 0.0

    def test_unparseable_number_defaults_to_zero(self):
        """Test that garbage numeric fields do not raise."""
        plan = InsurancePlan.model_validate({
            "id": 7,
            "category": "pet",
            "name": "Mascota Feliz",
            "basePrice": "abc",
            "rating": None,
        })
        assert plan.base_price == 0.0
        assert plan.rating == 0.0
        assert plan.id == "7"
        assert plan.category == InsuranceCategory.PET

    def test_leading_number_is_used(self):
        """Test that values like '120 USD' keep their leading number."""
        plan = InsurancePlan(id="a", category="travel", name="A", base_price="120 USD")
        assert plan.base_price == 120.0

    def test_empty_features_and_tags_are_dropped(self):
        """Test that blank feature and tag entries are removed."""
        plan = InsurancePlan(
            id="a", category="travel", name="A",
            features=["Asistencia", "", None], tags=None,
        )
        assert plan.features == ["Asistencia"]
        assert plan.tags == []

    def test_snake_case_and_camel_case_are_accepted(self):
        """Test that both key styles populate the same fields."""
        camel = InsurancePlan.model_validate(
            {"id": "a", "category": "auto", "name": "A", "coverageAmount": 10}
        )
        snake = InsurancePlan.model_validate(
            {"id": "a", "category": "auto", "name": "A", "coverage_amount": 10}
        )
        assert camel.coverage_amount == snake.coverage_amount == 10

    def test_unknown_category_rejected(self):
        """Test that categories outside the marketplace lines are invalid."""
        with pytest.raises(ValidationError):
            InsurancePlan(id="a", category="life", name="A")


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_default_criteria_keep_everything(self, travel_plans):
        """Test that default criteria exclude nothing in the default ranges."""
        assert apply_filters(travel_plans, default_filters()) == travel_plans

    def test_price_range(self, travel_plans):
        """Test that the inclusive price range is enforced."""
        result = apply_filters(travel_plans, FilterCriteria(price_range=(0, 100)))
        assert [p.id for p in result] == ["travel-basic-001"]

    def test_price_bounds_are_inclusive(self, travel_plans):
        """Test that plans priced exactly at a bound are kept."""
        result = apply_filters(travel_plans, FilterCriteria(price_range=(120, 200)))
        assert [p.id for p in result] == ["travel-latam-001", "travel-family-001"]

    def test_minimum_rating(self, travel_plans):
        """Test that plans below the minimum rating are dropped."""
        result = apply_filters(travel_plans, FilterCriteria(rating=4.5))
        assert [p.id for p in result] == ["travel-latam-001", "travel-premium-001"]

    def test_providers(self, travel_plans):
        """Test that only listed providers pass."""
        result = apply_filters(travel_plans, FilterCriteria(providers=["SURA"]))
        assert [p.id for p in result] == ["travel-basic-001", "travel-family-001"]

    def test_features_are_case_insensitive_substrings(self, travel_plans):
        """Test that feature terms match parts of feature names in any case."""
        result = apply_filters(travel_plans, FilterCriteria(features=["cancelación"]))
        assert [p.id for p in result] == ["travel-latam-001", "travel-premium-001"]

    def test_all_features_required(self, travel_plans):
        """Test that every requested feature must be present."""
        result = apply_filters(travel_plans, FilterCriteria(features=["ASISTENCIA", "familiar"]))
        assert [p.id for p in result] == ["travel-family-001"]

    def test_tags(self, travel_plans):
        """Test that tag terms match case-insensitively."""
        result = apply_filters(travel_plans, FilterCriteria(tags=["popular"]))
        assert [p.id for p in result] == ["travel-latam-001"]

    def test_deductible_range(self, travel_plans):
        """Test that deductibles outside the range are excluded."""
        result = apply_filters(travel_plans, FilterCriteria(deductible_range=(0, 100)))
        assert [p.id for p in result] == [
            "travel-basic-001", "travel-latam-001", "travel-family-001"
        ]

    def test_price_and_rating_combined(self, make_plan):
        """Test two plans where only one satisfies both price and rating."""
        cheap = make_plan(basePrice=50, rating=4.5)
        expensive = make_plan(basePrice=150, rating=3.8)
        criteria = FilterCriteria(price_range=(0, 100), rating=4)
        assert apply_filters([cheap, expensive], criteria) == [cheap]

    def test_no_match_returns_empty(self, travel_plans):
        """Test that an unknown provider yields an empty list."""
        assert apply_filters(travel_plans, FilterCriteria(providers=["Nadie"])) == []

    def test_empty_input(self):
        """Test that filtering nothing returns nothing."""
        assert apply_filters([], FilterCriteria(rating=3)) == []

    def test_result_is_order_preserving_subsequence(self, travel_plans):
        """Test that the output keeps the input order."""
        result = apply_filters(travel_plans, FilterCriteria(rating=4.1))
        positions = [travel_plans.index(p) for p in result]
        assert positions == sorted(positions)

    def test_idempotent(self, travel_plans):
        """Test that filtering twice gives the same result as once."""
        criteria = FilterCriteria(price_range=(50, 250), tags=["r"])
        once = apply_filters(travel_plans, criteria)
        assert apply_filters(once, criteria) == once

    def test_tightening_never_adds_plans(self, travel_plans):
        """Test that a narrower criteria keeps a subset."""
        loose = apply_filters(travel_plans, FilterCriteria(rating=4.0))
        tight = apply_filters(travel_plans, FilterCriteria(rating=4.4, providers=["Allianz", "AXA"]))
        assert all(plan in loose for plan in tight)

    def test_input_not_modified(self, travel_plans):
        """Test that the input list is left untouched."""
        snapshot = list(travel_plans)
        apply_filters(travel_plans, FilterCriteria(providers=["AXA"]))
        assert travel_plans == snapshot

    def test_plan_matches_single_plan(self, travel_plans):
        """Test the per-plan predicate directly."""
        assert plan_matches(travel_plans[1], FilterCriteria(tags=["recomendado"]))
        assert not plan_matches(travel_plans[0], FilterCriteria(tags=["recomendado"]))


class TestFilterOptions:
    """Tests for extract_filter_options."""

    def test_sorted_and_deduplicated(self, travel_plans):
        """Test that providers and tags are unique and sorted."""
        options = extract_filter_options(travel_plans)
        assert options.providers == ["AXA", "Allianz", "SURA"]
        assert options.tags == ["Económico", "Familiar", "Most Popular", "Premium", "Recomendado"]
        assert options.features.count("Asistencia médica") == 1

    def test_empty_list(self):
        """Test that no plans yields no options."""
        options = extract_filter_options([])
        assert options.providers == []
        assert options.features == []
        assert options.tags == []

    def test_blank_provider_ignored(self, make_plan):
        """Test that plans without a provider do not add an empty option."""
        options = extract_filter_options([make_plan(provider=""), make_plan(provider="Mapfre")])
        assert options.providers == ["Mapfre"]


class TestActiveFilterCount:
    """Tests for count_active_filters."""

    def test_defaults_are_inactive(self):
        """Test that default criteria count as zero filters."""
        assert count_active_filters(default_filters()) == 0

    def test_narrowed_price_range(self):
        """Test that narrowing the price range counts once."""
        assert count_active_filters(FilterCriteria(price_range=(0, 500))) == 1

    def test_each_kind_counts_once(self):
        """Test that several active criteria are counted separately."""
        criteria = FilterCriteria(
            price_range=(100, 1000),
            rating=4,
            providers=["SURA", "AXA"],
            tags=["premium"],
        )
        assert count_active_filters(criteria) == 4

    def test_all_filters_active(self):
        """Test the maximum count."""
        criteria = FilterCriteria(
            price_range=(10, 20),
            coverage_range=(10, 20),
            deductible_range=(10, 20),
            rating=1,
            providers=["a"],
            features=["b"],
            tags=["c"],
        )
        assert count_active_filters(criteria) == 7


class TestParsing:
    """Tests for lenient number parsing."""

    def test_parse_number(self):
        """Test the accepted and rejected inputs."""
        from briki.utils.parsing import parse_number

        assert parse_number("4.5 estrellas") == 4.5
        assert parse_number(3) == 3.0
        assert parse_number("") == 0.0
        assert parse_number(True) == 0.0
        assert parse_number("nan") == 0.0
        assert parse_number(float("inf"), default=1.0) == 1.0

    def test_round_half_up(self):
        """Test that halves round up."""
        from briki.utils.parsing import round_half_up

        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2
        assert round_half_up(-2.5) == -2
