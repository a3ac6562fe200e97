"""
Pipeline runner — wires the four scoring agents together and returns an
AnalysisResult for one page.

Architecture:
  ScoreAggregationAgent → OpportunityCalculatorAgent
    → PriorityClassifierAgent → PlanRecommenderAgent
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from agents.base import AnalysisState, Orchestrator
from agents.opportunities import OpportunityCalculatorAgent
from agents.plans import PlanRecommenderAgent
from agents.priority import PriorityClassifierAgent
from agents.scoring import CATEGORIES, ScoreAggregationAgent, validate_category_results
from agents.signals import MockSignalSource, SignalSource
from config.industries import INDUSTRY_REGISTRY, IndustryRegistry
from db.database import get_db, save_analysis
from models.schemas import AnalysisResult, BusinessInfo, InvalidInputError, Issue, PageSignals

logger = logging.getLogger(__name__)


def build_orchestrator(registry: Optional[IndustryRegistry] = None) -> Orchestrator:
    registry = registry if registry is not None else INDUSTRY_REGISTRY
    return Orchestrator([
        ScoreAggregationAgent(registry=registry),
        OpportunityCalculatorAgent(registry=registry),
        PriorityClassifierAgent(),
        PlanRecommenderAgent(registry=registry),
    ])


def collect_issues(signals: PageSignals) -> List[Issue]:
    """Analyzer issues in category order, passed through unchanged."""
    issues: List[Issue] = []
    for category in CATEGORIES:
        issues.extend(signals.results[category].issues)
    return issues


def run_analysis(
    signals: PageSignals,
    registry: Optional[IndustryRegistry] = None,
) -> AnalysisResult:
    """
    Score one page end to end.

    Raises InvalidInputError for malformed analyzer output and RuntimeError
    when an agent fails for any other reason.
    """
    if signals is None or signals.business is None:
        raise InvalidInputError("Page signals with business info are required")
    validate_category_results(signals.results)

    pipeline = build_orchestrator(registry)
    result = pipeline.execute(AnalysisState(signals=signals))
    if not result.success:
        raise RuntimeError(f"Analysis failed: {result.error}")

    logger.debug(pipeline.summary())
    state: AnalysisState = result.data

    analysis = AnalysisResult(
        url=signals.business.url,
        business=signals.business,
        scores=state.scores,
        issues=collect_issues(signals),
        opportunities=state.opportunities,
        summary=state.summary,
        estimated_monthly_loss=state.estimated_monthly_loss,
        recommended_plan=state.recommended_plan,
        roi=state.roi,
        priority=state.priority,
        analyzed_at=datetime.utcnow(),
    )
    logger.info(
        f"Analysis complete: {analysis.url} — score {analysis.scores.total}, "
        f"priority {analysis.priority.value}, plan {analysis.recommended_plan.value}"
    )
    return analysis


def analyze_business(
    business: BusinessInfo,
    source: Optional[SignalSource] = None,
    registry: Optional[IndustryRegistry] = None,
) -> AnalysisResult:
    source = source if source is not None else MockSignalSource()
    return run_analysis(source.collect(business), registry=registry)


def analyze_businesses(
    businesses: Sequence[BusinessInfo],
    source: Optional[SignalSource] = None,
    registry: Optional[IndustryRegistry] = None,
) -> List[AnalysisResult]:
    """
    Score a list of pages one after another. A page whose analysis fails is
    logged and left out; the rest still complete.
    """
    source = source if source is not None else MockSignalSource()
    results: List[AnalysisResult] = []
    for business in businesses:
        try:
            results.append(analyze_business(business, source=source, registry=registry))
        except (InvalidInputError, RuntimeError) as e:
            logger.error(f"❌ Analysis failed for {business.url}: {e}")
    logger.info(f"Analyzed {len(results)}/{len(businesses)} pages")
    return results


def analyze_and_store(
    businesses: Sequence[BusinessInfo],
    source: Optional[SignalSource] = None,
    registry: Optional[IndustryRegistry] = None,
) -> List[int]:
    """Batch-analyze pages and store every finished analysis in one transaction."""
    results = analyze_businesses(businesses, source=source, registry=registry)
    with get_db() as db:
        records = [save_analysis(db, result) for result in results]
        ids = [record.analysis_id for record in records]
    logger.info(f"Stored {len(ids)} analyses")
    return ids
