"""
Industry registry and score aggregation tests.
Run with: python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import math

import pytest
from agents.scoring import (
    ScoreAggregationAgent, compute_scores, interpret_score, score_breakdown,
    validate_category_results,
)
from agents.base import AnalysisState
from config.constants import GLOBAL_WEIGHTS
from config.industries import INDUSTRY_REGISTRY, IndustryRegistry
from models.schemas import (
    BusinessInfo, Category, CategoryResult, CompositeScore, InvalidInputError,
    PageSignals,
)


def make_results(performance=80, mobile=80, seo=80, conversion=80, content=80):
    scores = {
        Category.PERFORMANCE: performance,
        Category.MOBILE: mobile,
        Category.SEO: seo,
        Category.CONVERSION: conversion,
        Category.CONTENT: content,
    }
    return {c: CategoryResult(category=c, score=s) for c, s in scores.items()}


# ─── Industry Registry ───────────────────────────────────────────────────────

class TestIndustryRegistry:
    def test_known_industry_resolves(self):
        profile = INDUSTRY_REGISTRY.get("restaurant")
        assert profile.id == "restaurant"
        assert profile.average_monthly_revenue == 3000000
        assert profile.multiplier(Category.CONVERSION) == 1.3

    def test_lookup_ignores_case_and_whitespace(self):
        assert INDUSTRY_REGISTRY.get("  Beauty ").id == "beauty"

    @pytest.mark.parametrize("industry_id", [None, "", "spaceship", "   "])
    def test_unknown_or_missing_falls_back_to_default(self, industry_id):
        profile = INDUSTRY_REGISTRY.get(industry_id)
        assert profile.id == "default"
        assert profile.average_monthly_revenue == 2500000

    def test_default_profile_has_neutral_multipliers(self):
        default = INDUSTRY_REGISTRY.default
        assert all(default.multiplier(c) == 1.0 for c in Category)

    def test_registry_requires_default_profile(self):
        with pytest.raises(ValueError):
            IndustryRegistry([INDUSTRY_REGISTRY.get("legal")])

    def test_membership_and_ids(self):
        assert "clinic" in INDUSTRY_REGISTRY
        assert "spaceship" not in INDUSTRY_REGISTRY
        assert set(INDUSTRY_REGISTRY.ids()) == {
            "restaurant", "beauty", "clinic", "retail", "legal", "default",
        }

    def test_profiles_are_read_only(self):
        profile = INDUSTRY_REGISTRY.get("retail")
        with pytest.raises(TypeError):
            profile.weight_multipliers[Category.SEO] = 5.0
        with pytest.raises(AttributeError):
            profile.average_monthly_revenue = 1


# ─── Score Aggregator ────────────────────────────────────────────────────────

class TestComputeScores:
    def test_reference_scenario(self):
        scores = compute_scores(make_results(performance=20), True, "default")
        assert scores == CompositeScore(
            total=65, performance=20, mobile=80, seo=80, conversion=80, content=80,
        )

    def test_global_weights(self):
        assert dict(GLOBAL_WEIGHTS) == {
            Category.PERFORMANCE: 0.25,
            Category.MOBILE: 0.20,
            Category.SEO: 0.20,
            Category.CONVERSION: 0.20,
            Category.CONTENT: 0.15,
        }

    def test_insecure_transport_penalizes_performance_and_seo_only(self):
        scores = compute_scores(make_results(performance=62, seo=75), False)
        assert scores.performance == 52
        assert scores.seo == 60
        assert scores.mobile == 80
        assert scores.conversion == 80
        assert scores.content == 80
        assert scores.total == 69

    def test_insecure_penalty_floors_at_zero(self):
        scores = compute_scores(make_results(performance=5, seo=10), False)
        assert scores.performance == 0
        assert scores.seo == 0

    def test_industry_multipliers_applied(self):
        scores = compute_scores(make_results(60, 60, 60, 60, 60), True, "restaurant")
        assert (scores.performance, scores.mobile, scores.seo, scores.conversion, scores.content) == (
            60, 72, 54, 78, 48,
        )
        assert scores.total == 63

    def test_adjusted_scores_round_half_up(self):
        # 45 * 0.9 = 40.5
        scores = compute_scores(make_results(performance=45), True, "beauty")
        assert scores.performance == 41

    def test_weighted_score_clamped_to_100(self):
        scores = compute_scores(make_results(mobile=90), True, "beauty")
        assert scores.mobile == 100

    def test_out_of_range_inputs_clamped(self):
        high = compute_scores(make_results(500, 500, 500, 500, 500), True)
        assert high.to_dict() == {k: 100 for k in high.to_dict()}

        low = compute_scores(make_results(-30, -30, -30, -30, -30), False)
        assert low.to_dict() == {k: 0 for k in low.to_dict()}

    @pytest.mark.parametrize("industry_id", list(INDUSTRY_REGISTRY.ids()))
    @pytest.mark.parametrize("raw", [0, 37, 64, 99, 100, 250])
    def test_every_field_within_bounds(self, industry_id, raw):
        scores = compute_scores(make_results(raw, raw, raw, raw, raw), False, industry_id)
        assert all(0 <= v <= 100 for v in scores.to_dict().values())

    def test_unknown_industry_matches_default(self):
        results = make_results(33, 47, 58, 71, 90)
        assert compute_scores(results, True, "spaceship") == compute_scores(results, True, "default")
        assert compute_scores(results, True) == compute_scores(results, True, "default")

    def test_deterministic(self):
        results = make_results(33, 47, 58, 71, 90)
        runs = {compute_scores(results, False, "legal") for _ in range(5)}
        assert len(runs) == 1


class TestInputValidation:
    def test_missing_category_rejected(self):
        results = make_results()
        del results[Category.CONTENT]
        with pytest.raises(InvalidInputError, match="Content"):
            compute_scores(results, True)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, "80", None, True])
    def test_non_numeric_score_rejected(self, bad):
        results = make_results()
        results[Category.SEO] = CategoryResult(category=Category.SEO, score=bad)
        with pytest.raises(InvalidInputError):
            validate_category_results(results)

    def test_missing_opportunity_list_rejected(self):
        results = make_results()
        results[Category.MOBILE] = CategoryResult(category=Category.MOBILE, score=50, opportunities=None)
        with pytest.raises(InvalidInputError):
            validate_category_results(results)

    def test_none_results_rejected(self):
        with pytest.raises(InvalidInputError):
            validate_category_results(None)

    def test_invalid_input_is_a_value_error(self):
        assert issubclass(InvalidInputError, ValueError)


class TestBreakdownAndInterpretation:
    def test_breakdown_contributions(self):
        scores = CompositeScore(total=65, performance=20, mobile=80, seo=80, conversion=80, content=80)
        breakdown = score_breakdown(scores)
        assert [b.category for b in breakdown] == list(Category)
        assert [b.contribution for b in breakdown] == [5, 16, 16, 16, 12]

    @pytest.mark.parametrize("score,word", [
        (95, "excellent"), (70, "good"), (55, "needs improvement"),
        (30, "major problems"), (10, "critical"),
    ])
    def test_interpretation_bands(self, score, word):
        assert word in interpret_score(score, "SEO")


class TestScoreAggregationAgent:
    def test_agent_sets_scores(self):
        state = AnalysisState(signals=PageSignals(
            business=BusinessInfo(url="https://example.com", industry="default"),
            is_secure_transport=True,
            results=make_results(performance=20),
        ))
        result = ScoreAggregationAgent().execute(state)
        assert result.success
        assert result.data.scores.total == 65

    def test_agent_reports_invalid_input(self):
        results = make_results()
        del results[Category.SEO]
        state = AnalysisState(signals=PageSignals(
            business=BusinessInfo(url="https://example.com"),
            is_secure_transport=True,
            results=results,
        ))
        result = ScoreAggregationAgent().execute(state)
        assert not result.success
        assert result.error_type == "InvalidInputError"
