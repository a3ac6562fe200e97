"""
Core data models for the Website Opportunity Scorer.
"""

from .schemas import (
    InvalidInputError,
    Category,
    Effort,
    Severity,
    PriorityTier,
    PlanTier,
    Opportunity,
    Issue,
    CategoryResult,
    IndustryProfile,
    PlanInfo,
    CompositeScore,
    ScoreBreakdownItem,
    OpportunitySummary,
    ROIProjection,
    BusinessInfo,
    PageSignals,
    AnalysisResult,
)

__all__ = [
    "InvalidInputError",
    "Category",
    "Effort",
    "Severity",
    "PriorityTier",
    "PlanTier",
    "Opportunity",
    "Issue",
    "CategoryResult",
    "IndustryProfile",
    "PlanInfo",
    "CompositeScore",
    "ScoreBreakdownItem",
    "OpportunitySummary",
    "ROIProjection",
    "BusinessInfo",
    "PageSignals",
    "AnalysisResult",
]
