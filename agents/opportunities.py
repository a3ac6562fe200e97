"""
Opportunity Calculator Agent
-----------------------------
Turns the per-category opportunity lists into one ranked shortlist:

  1. Rescale each revenue lift to the industry:  lift * avg_industry / avg_default
  2. Add synthetic cross-category opportunities from composite thresholds
  3. Merge and de-duplicate by case-insensitive title (higher priority wins,
     first seen wins on ties)
  4. Boost priorities for weak categories, cheap wins and large lifts
  5. Sort by (priority desc, revenue lift desc) and keep the top N

The +2 revenue boost uses an absolute threshold; it is not rescaled by the
industry baseline the way step 1 is.

Input:  AnalysisState (scores)
Output: AnalysisState (+ opportunities, summary, estimated_monthly_loss)
"""

import logging
import re
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence

from agents.base import Agent, AnalysisState
from agents.scoring import MAX_PRIORITY, validate_opportunities
from config.industries import INDUSTRY_REGISTRY, IndustryRegistry
from config.settings import settings
from models.schemas import (
    Category, CompositeScore, Effort, IndustryProfile, InvalidInputError,
    Opportunity, OpportunitySummary, round_half_up,
)

logger = logging.getLogger(__name__)

# Merge order of analyzer output.
MERGE_ORDER = (
    Category.PERFORMANCE,
    Category.SEO,
    Category.MOBILE,
    Category.CONVERSION,
    Category.CONTENT,
)

# Categories whose name in an opportunity title earns a boost when weak.
BOOSTED_CATEGORIES = (
    Category.PERFORMANCE,
    Category.MOBILE,
    Category.SEO,
    Category.CONVERSION,
)


# ─── Synthetic opportunities ─────────────────────────────────────────────────


def _synthetic(title, description, improvement, revenue_share, effort, priority, profile):
    return Opportunity(
        title=title,
        description=description,
        estimated_improvement_pct=improvement,
        estimated_revenue_lift=round_half_up(profile.average_monthly_revenue * revenue_share),
        effort=effort,
        priority=priority,
    )


def generate_synthetic_opportunities(
    scores: CompositeScore,
    profile: IndustryProfile,
) -> List[Opportunity]:
    """Independent threshold rules; any combination may fire."""
    opportunities: List[Opportunity] = []

    if scores.total < 30:
        opportunities.append(_synthetic(
            "Full website renewal",
            "Rebuild the site with modern design and features to stand out from competitors",
            60, 0.10, Effort.HIGH, 10, profile,
        ))

    if scores.performance < 50 and scores.mobile < 50:
        opportunities.append(_synthetic(
            "Mobile-first redesign",
            "Build a fast site designed for smartphone visitors first",
            40, 0.08, Effort.HIGH, 9, profile,
        ))

    if scores.seo < 50 and scores.content < 50:
        opportunities.append(_synthetic(
            "Content marketing strategy",
            "Grow organic traffic with useful, search-friendly content",
            35, 0.06, Effort.MEDIUM, 8, profile,
        ))

    if scores.conversion < 40:
        opportunities.append(_synthetic(
            "Conversion rate optimization (CRO) program",
            "Double the conversion rate with A/B testing and visitor behaviour analysis",
            30, 0.12, Effort.MEDIUM, 9, profile,
        ))

    return opportunities


# ─── Ranking steps ───────────────────────────────────────────────────────────


def normalize_revenue(
    opportunities: Sequence[Opportunity],
    profile: IndustryProfile,
    default_profile: IndustryProfile,
) -> List[Opportunity]:
    factor = profile.average_monthly_revenue / default_profile.average_monthly_revenue
    return [
        replace(opp, estimated_revenue_lift=round_half_up(opp.estimated_revenue_lift * factor))
        for opp in opportunities
    ]


def deduplicate_opportunities(opportunities: Sequence[Opportunity]) -> List[Opportunity]:
    """
    One pass keyed by lower-cased title. A later duplicate replaces the kept
    one only with a strictly higher priority.
    """
    best: Dict[str, Opportunity] = {}
    for opp in opportunities:
        kept = best.get(opp.key)
        if kept is None or opp.priority > kept.priority:
            best[opp.key] = opp
    return list(best.values())


def boost_priority(opp: Opportunity, scores: CompositeScore) -> int:
    boost = 0
    title = opp.title.lower()

    # whole words only: "seoul" is not an SEO opportunity
    for category in BOOSTED_CATEGORIES:
        named = re.search(rf"\b{category.key}\b", title)
        if named and scores.category_score(category) < settings.LOW_SCORE_THRESHOLD:
            boost += 2

    if opp.effort == Effort.LOW and opp.estimated_improvement_pct > 20:
        boost += 3

    if opp.estimated_revenue_lift > settings.REVENUE_BOOST_THRESHOLD:
        boost += 2

    return min(MAX_PRIORITY, opp.priority + boost)


def rank_opportunities(
    scores: CompositeScore,
    per_category_opportunities: Mapping[Category, Sequence[Opportunity]],
    industry_id: Optional[str] = None,
    registry: IndustryRegistry = INDUSTRY_REGISTRY,
    limit: Optional[int] = None,
) -> List[Opportunity]:
    """Return the ranked top-N opportunity list for one page."""
    limit = settings.MAX_OPPORTUNITIES if limit is None else limit
    profile = registry.get(industry_id)

    raw: List[Opportunity] = []
    for category in MERGE_ORDER:
        if category not in per_category_opportunities:
            raise InvalidInputError(f"Missing opportunity list for {category.value}")
        opps = per_category_opportunities[category]
        validate_opportunities(opps, source=category.value)
        raw.extend(opps)

    merged = normalize_revenue(raw, profile, registry.default)
    synthetic = generate_synthetic_opportunities(scores, profile)
    merged.extend(synthetic)

    unique = deduplicate_opportunities(merged)
    boosted = [replace(opp, priority=boost_priority(opp, scores)) for opp in unique]
    boosted.sort(key=lambda o: (o.priority, o.estimated_revenue_lift), reverse=True)

    logger.debug(
        f"Opportunities: raw={len(raw)} synthetic={len(synthetic)} "
        f"unique={len(unique)} kept={min(limit, len(boosted))}"
    )
    return boosted[:limit]


def summarize_opportunities(opportunities: Sequence[Opportunity]) -> OpportunitySummary:
    return OpportunitySummary(
        total_monthly_revenue_lift=sum(o.estimated_revenue_lift for o in opportunities),
        total_improvement_pct=sum(o.estimated_improvement_pct for o in opportunities),
        quick_wins=[
            o for o in opportunities
            if o.effort == Effort.LOW
            and o.estimated_improvement_pct >= settings.QUICK_WIN_MIN_IMPROVEMENT
        ],
        high_impact=[
            o for o in opportunities
            if o.estimated_revenue_lift >= settings.HIGH_IMPACT_MIN_REVENUE
            or o.estimated_improvement_pct >= settings.HIGH_IMPACT_MIN_IMPROVEMENT
        ],
    )


# ─── OpportunityCalculatorAgent ──────────────────────────────────────────────


class OpportunityCalculatorAgent(Agent):
    """
    Agent 2: Opportunity Calculator

    Input:  AnalysisState with scores
    Output: AnalysisState with opportunities, summary and monthly loss
    """

    def __init__(self, registry: Optional[IndustryRegistry] = None, limit: Optional[int] = None):
        super().__init__(name="OpportunityCalculatorAgent")
        self.registry = registry if registry is not None else INDUSTRY_REGISTRY
        self.limit = limit

    def run(self, state: AnalysisState) -> AnalysisState:
        scores = state.require_scores()
        per_category = {c: r.opportunities for c, r in state.signals.results.items()}

        state.opportunities = rank_opportunities(
            scores, per_category,
            industry_id=state.industry,
            registry=self.registry,
            limit=self.limit,
        )
        state.summary = summarize_opportunities(state.opportunities)
        state.estimated_monthly_loss = state.summary.total_monthly_revenue_lift

        self.logger.info(
            f"{len(state.opportunities)} opportunities, "
            f"estimated monthly loss {state.estimated_monthly_loss:,.0f}"
        )
        for opp in state.opportunities[:3]:
            self.logger.debug(
                f"  P{opp.priority} [{opp.effort.value}] {opp.title} "
                f"(+{opp.estimated_improvement_pct}%, {opp.estimated_revenue_lift:,.0f})"
            )
        return state
