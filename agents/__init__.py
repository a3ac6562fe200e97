from .base import Agent, AgentResult, AnalysisState, Orchestrator
from .scoring import ScoreAggregationAgent, compute_scores
from .opportunities import OpportunityCalculatorAgent, rank_opportunities, summarize_opportunities
from .priority import PriorityClassifierAgent, classify_priority
from .plans import PlanRecommenderAgent, recommend_plan, estimate_roi
from .signals import SignalSource, MockSignalSource

__all__ = [
    "Agent", "AgentResult", "AnalysisState", "Orchestrator",
    "ScoreAggregationAgent", "OpportunityCalculatorAgent",
    "PriorityClassifierAgent", "PlanRecommenderAgent",
    "compute_scores", "rank_opportunities", "summarize_opportunities",
    "classify_priority", "recommend_plan", "estimate_roi",
    "SignalSource", "MockSignalSource",
]
