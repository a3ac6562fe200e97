"""
Priority Classifier Agent
--------------------------
Sales urgency from composite score and estimated monthly revenue loss.
Checks run top to bottom, first match wins:

  score <= 40 or loss >= 100,000  → High
  score <= 60 or loss >=  50,000  → Medium
  otherwise                       → Low
"""

from agents.base import Agent, AnalysisState
from config.constants import PRIORITY_THRESHOLDS
from models.schemas import PriorityTier


def classify_priority(total_score: float, estimated_monthly_loss: float) -> PriorityTier:
    for tier, threshold in PRIORITY_THRESHOLDS:
        if (
            total_score <= threshold["score_max"]
            or estimated_monthly_loss >= threshold["monthly_loss_min"]
        ):
            return tier
    return PriorityTier.LOW


class PriorityClassifierAgent(Agent):
    """Agent 3: Priority Classifier"""

    def __init__(self):
        super().__init__(name="PriorityClassifierAgent")

    def run(self, state: AnalysisState) -> AnalysisState:
        scores = state.require_scores()
        state.priority = classify_priority(scores.total, state.estimated_monthly_loss)
        self.logger.info(f"Priority {state.priority.value} for {state.signals.business.url}")
        return state
