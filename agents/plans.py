"""
Plan Recommender Agent
-----------------------
Picks a remediation plan from the composite score and projects its return:

  improvement = max(0, target(plan) - current)
  return      = revenue_base * improvement * 0.005     (per month)
  payback     = ceil(price / max(1, return - price))
  3y ROI      = round((return*36 - price*36) / (price*36) * 100)

Input:  AnalysisState (scores)
Output: AnalysisState (+ recommended_plan, roi)
"""

import math
from typing import Mapping, Optional

from agents.base import Agent, AnalysisState
from config.constants import PLANS, PREMIUM_BELOW, STANDARD_BELOW
from config.industries import INDUSTRY_REGISTRY, IndustryRegistry
from config.settings import settings
from models.schemas import PlanInfo, PlanTier, ROIProjection, round_half_up


def recommend_plan(total_score: float) -> PlanTier:
    if total_score < PREMIUM_BELOW:
        return PlanTier.PREMIUM
    elif total_score < STANDARD_BELOW:
        return PlanTier.STANDARD
    return PlanTier.SIMPLE


def get_plan(tier: PlanTier, plans: Mapping[PlanTier, PlanInfo] = PLANS) -> PlanInfo:
    return plans[PlanTier(tier)]


def improvement_potential(
    current_score: float,
    plan: PlanTier,
    plans: Mapping[PlanTier, PlanInfo] = PLANS,
) -> float:
    return max(0, get_plan(plan, plans).target_score - current_score)


def estimate_roi(
    current_score: float,
    plan: PlanTier,
    industry_id: Optional[str] = None,
    current_monthly_revenue: Optional[float] = None,
    registry: IndustryRegistry = INDUSTRY_REGISTRY,
    plans: Mapping[PlanTier, PlanInfo] = PLANS,
) -> ROIProjection:
    info = get_plan(plan, plans)
    potential = improvement_potential(current_score, plan, plans)

    # A zero or missing revenue falls back to the industry baseline.
    revenue_base = current_monthly_revenue or registry.get(industry_id).average_monthly_revenue
    monthly_return = revenue_base * potential * settings.ROI_RATE_PER_POINT

    price = info.monthly_price
    payback = math.ceil(price / max(1, monthly_return - price)) if price > 0 else 0

    months = settings.ROI_HORIZON_MONTHS
    investment = price * months
    three_year_roi = (
        round_half_up((monthly_return * months - investment) / investment * 100)
        if investment > 0 else 0
    )

    return ROIProjection(
        monthly_investment=price,
        estimated_monthly_return=monthly_return,
        payback_period_months=payback,
        three_year_roi=three_year_roi,
    )


class PlanRecommenderAgent(Agent):
    """Agent 4: Plan Recommender"""

    def __init__(
        self,
        registry: Optional[IndustryRegistry] = None,
        plans: Optional[Mapping[PlanTier, PlanInfo]] = None,
    ):
        super().__init__(name="PlanRecommenderAgent")
        self.registry = registry if registry is not None else INDUSTRY_REGISTRY
        self.plans = plans if plans is not None else PLANS

    def run(self, state: AnalysisState) -> AnalysisState:
        scores = state.require_scores()
        state.recommended_plan = recommend_plan(scores.total)
        state.roi = estimate_roi(
            scores.total,
            state.recommended_plan,
            industry_id=state.industry,
            current_monthly_revenue=state.signals.current_monthly_revenue,
            registry=self.registry,
            plans=self.plans,
        )
        self.logger.info(
            f"Plan {state.recommended_plan.value}: "
            f"return {state.roi.estimated_monthly_return:,.0f}/mo, "
            f"payback {state.roi.payback_period_months} mo, "
            f"3y ROI {state.roi.three_year_roi}%"
        )
        return state
