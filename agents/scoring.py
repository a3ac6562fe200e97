"""
Score Aggregation Agent
------------------------
Fuses the five category scores into a composite 0–100 score:

  adjusted_c = round(penalized_c * m_c)          m_c = industry multiplier
  total      = round(Σ adjusted_c * w_c / Σ w_c)  w_c = global weight

A page served without HTTPS loses 10 Performance and 15 SEO points before
weighting (floored at 0). Every output field is clamped to [0, 100] after
weighting, so an out-of-range analyzer score can never leak through.

Input:  AnalysisState (signals)
Output: AnalysisState (+ scores)
"""

import logging
from typing import List, Mapping, Optional

import numpy as np

from agents.base import Agent, AnalysisState
from config.constants import GLOBAL_WEIGHTS
from config.industries import INDUSTRY_REGISTRY, IndustryRegistry
from config.settings import settings
from models.schemas import (
    Category, CategoryResult, CompositeScore, InvalidInputError, Opportunity,
    ScoreBreakdownItem, is_finite_number, round_half_up,
)

logger = logging.getLogger(__name__)

CATEGORIES = tuple(Category)

MIN_PRIORITY, MAX_PRIORITY = 1, 10


# ─── Input validation ────────────────────────────────────────────────────────


def validate_opportunities(opportunities, source: str = "opportunities") -> None:
    if opportunities is None:
        raise InvalidInputError(f"{source}: opportunity list is missing")
    for opp in opportunities:
        if not isinstance(opp, Opportunity):
            raise InvalidInputError(f"{source}: expected Opportunity, got {type(opp).__name__}")
        if not is_finite_number(opp.estimated_revenue_lift):
            raise InvalidInputError(f"{source}: '{opp.title}' has non-numeric revenue lift")
        if not is_finite_number(opp.estimated_improvement_pct):
            raise InvalidInputError(f"{source}: '{opp.title}' has non-numeric improvement")
        if not is_finite_number(opp.priority):
            raise InvalidInputError(f"{source}: '{opp.title}' has non-numeric priority")
        if not isinstance(opp.priority, int) or not MIN_PRIORITY <= opp.priority <= MAX_PRIORITY:
            raise InvalidInputError(
                f"{source}: '{opp.title}' priority must be an integer "
                f"{MIN_PRIORITY}-{MAX_PRIORITY}, got {opp.priority!r}"
            )


def validate_category_results(category_results: Mapping[Category, CategoryResult]) -> None:
    """Fail fast on missing categories, non-numeric scores or missing lists."""
    if category_results is None:
        raise InvalidInputError("Category results are missing")
    missing = [c.value for c in CATEGORIES if category_results.get(c) is None]
    if missing:
        raise InvalidInputError(f"Missing category results: {', '.join(missing)}")

    for category in CATEGORIES:
        result = category_results[category]
        if not isinstance(result, CategoryResult):
            raise InvalidInputError(
                f"{category.value}: expected CategoryResult, got {type(result).__name__}"
            )
        if not is_finite_number(result.score):
            raise InvalidInputError(f"{category.value}: score must be a finite number, got {result.score!r}")
        validate_opportunities(result.opportunities, source=category.value)
        if result.issues is None:
            raise InvalidInputError(f"{category.value}: issue list is missing")


# ─── Aggregation ─────────────────────────────────────────────────────────────


def compute_scores(
    category_results: Mapping[Category, CategoryResult],
    is_secure_transport: bool,
    industry_id: Optional[str] = None,
    registry: IndustryRegistry = INDUSTRY_REGISTRY,
    weights: Mapping[Category, float] = GLOBAL_WEIGHTS,
) -> CompositeScore:
    validate_category_results(category_results)
    profile = registry.get(industry_id)

    base = {c: float(category_results[c].score) for c in CATEGORIES}
    if not is_secure_transport:
        base[Category.PERFORMANCE] = max(0.0, base[Category.PERFORMANCE] - settings.HTTP_PERFORMANCE_PENALTY)
        base[Category.SEO] = max(0.0, base[Category.SEO] - settings.HTTP_SEO_PENALTY)

    adjusted = np.array(
        [round_half_up(base[c] * profile.multiplier(c)) for c in CATEGORIES],
        dtype=float,
    )
    w = np.array([weights[c] for c in CATEGORIES], dtype=float)

    total = round_half_up(float(np.average(adjusted, weights=w)))

    # clip to [0, 100] after weighting
    clipped = [int(v) for v in np.clip(adjusted, 0, 100)]
    return CompositeScore(
        total=int(np.clip(total, 0, 100)),
        **{c.key: clipped[i] for i, c in enumerate(CATEGORIES)},
    )


def score_breakdown(
    scores: CompositeScore,
    weights: Mapping[Category, float] = GLOBAL_WEIGHTS,
) -> List[ScoreBreakdownItem]:
    """Per-category contribution to the composite total."""
    total_weight = sum(weights.values())
    return [
        ScoreBreakdownItem(
            category=c,
            score=scores.category_score(c),
            weight=weights[c],
            contribution=round_half_up(scores.category_score(c) * weights[c] / total_weight),
        )
        for c in CATEGORIES
    ]


def interpret_score(score: float, label: str) -> str:
    if score >= 90:
        return f"{label} is excellent. Maintain it and keep pushing further."
    elif score >= 70:
        return f"{label} is good, but there is room for improvement."
    elif score >= 50:
        return f"{label} needs improvement. Address it as a priority."
    elif score >= 30:
        return f"{label} has major problems. Urgent action is required."
    return f"{label} is in critical condition. A full overhaul is needed."


# ─── ScoreAggregationAgent ───────────────────────────────────────────────────


class ScoreAggregationAgent(Agent):
    """
    Agent 1: Score Aggregation

    Input:  AnalysisState with signals
    Output: AnalysisState with `scores` set
    """

    def __init__(
        self,
        registry: Optional[IndustryRegistry] = None,
        weights: Optional[Mapping[Category, float]] = None,
    ):
        super().__init__(name="ScoreAggregationAgent")
        self.registry = registry if registry is not None else INDUSTRY_REGISTRY
        self.weights = weights if weights is not None else GLOBAL_WEIGHTS

    def run(self, state: AnalysisState) -> AnalysisState:
        signals = state.signals
        state.scores = compute_scores(
            signals.results,
            signals.is_secure_transport,
            industry_id=state.industry,
            registry=self.registry,
            weights=self.weights,
        )
        self.logger.info(
            f"Composite for {signals.business.url}: {state.scores.total} "
            f"(perf={state.scores.performance} mobile={state.scores.mobile} "
            f"seo={state.scores.seo} conv={state.scores.conversion} "
            f"content={state.scores.content})"
        )
        return state
