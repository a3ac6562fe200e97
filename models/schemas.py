"""
Core data models / schemas for the Website Opportunity Scorer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class InvalidInputError(ValueError):
    """Raised when analyzer output handed to the scoring core is malformed."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Category(str, Enum):
    PERFORMANCE = "Performance"
    MOBILE = "Mobile"
    SEO = "SEO"
    CONVERSION = "Conversion"
    CONTENT = "Content"

    @property
    def key(self) -> str:
        """Lower-case field name used on CompositeScore and in weight tables."""
        return self.value.lower()

    @classmethod
    def from_key(cls, key: str) -> "Category":
        for category in cls:
            if category.key == key.lower() or category.value == key:
                return category
        raise InvalidInputError(f"Unknown category: {key!r}")


class Effort(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Severity(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PriorityTier(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PlanTier(str, Enum):
    SIMPLE = "Simple"
    STANDARD = "Standard"
    PREMIUM = "Premium"


# ---------------------------------------------------------------------------
# Analyzer output
# ---------------------------------------------------------------------------

@dataclass
class Opportunity:
    title: str
    description: str
    estimated_improvement_pct: float    # percentage points
    estimated_revenue_lift: float       # monthly, single currency unit
    effort: Effort
    priority: int                       # 1–10

    @property
    def key(self) -> str:
        return self.title.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "estimated_improvement_pct": self.estimated_improvement_pct,
            "estimated_revenue_lift": self.estimated_revenue_lift,
            "effort": self.effort.value,
            "priority": self.priority,
        }


@dataclass
class Issue:
    category: Category
    severity: Severity
    description: str
    impact: str
    solution: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "description": self.description,
            "impact": self.impact,
            "solution": self.solution,
        }


@dataclass
class CategoryResult:
    category: Category
    score: float                        # 0–100 as reported by the analyzer
    opportunities: List[Opportunity] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Static configuration records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IndustryProfile:
    id: str
    weight_multipliers: Mapping[Category, float]
    keywords: frozenset
    average_monthly_revenue: float
    critical_elements: Tuple[str, ...] = ()

    def multiplier(self, category: Category) -> float:
        return self.weight_multipliers.get(category, 1.0)


@dataclass(frozen=True)
class PlanInfo:
    tier: PlanTier
    name: str
    features: Tuple[str, ...]
    target_score: int
    monthly_price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "name": self.name,
            "features": list(self.features),
            "target_score": self.target_score,
            "monthly_price": self.monthly_price,
        }


# ---------------------------------------------------------------------------
# Scoring output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompositeScore:
    total: int
    performance: int
    mobile: int
    seo: int
    conversion: int
    content: int

    def category_score(self, category: Category) -> int:
        return getattr(self, category.key)

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "performance": self.performance,
            "mobile": self.mobile,
            "seo": self.seo,
            "conversion": self.conversion,
            "content": self.content,
        }


@dataclass
class ScoreBreakdownItem:
    category: Category
    score: int
    weight: float
    contribution: int


@dataclass
class OpportunitySummary:
    total_monthly_revenue_lift: float
    total_improvement_pct: float
    quick_wins: List[Opportunity]
    high_impact: List[Opportunity]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_monthly_revenue_lift": self.total_monthly_revenue_lift,
            "total_improvement_pct": self.total_improvement_pct,
            "quick_wins": [o.title for o in self.quick_wins],
            "high_impact": [o.title for o in self.high_impact],
        }


@dataclass
class ROIProjection:
    monthly_investment: float
    estimated_monthly_return: float
    payback_period_months: int
    three_year_roi: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthly_investment": self.monthly_investment,
            "estimated_monthly_return": self.estimated_monthly_return,
            "payback_period_months": self.payback_period_months,
            "three_year_roi": self.three_year_roi,
        }


# ---------------------------------------------------------------------------
# Page-level input / result
# ---------------------------------------------------------------------------

@dataclass
class BusinessInfo:
    url: str
    business_name: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None


@dataclass
class PageSignals:
    """Everything the external analyzers collected for one page."""
    business: BusinessInfo
    is_secure_transport: bool
    results: Dict[Category, CategoryResult]
    current_monthly_revenue: Optional[float] = None


@dataclass
class AnalysisResult:
    url: str
    business: BusinessInfo
    scores: CompositeScore
    issues: List[Issue]
    opportunities: List[Opportunity]
    summary: OpportunitySummary
    estimated_monthly_loss: float
    recommended_plan: PlanTier
    roi: ROIProjection
    priority: PriorityTier
    analyzed_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "business_name": self.business.business_name,
            "industry": self.business.industry,
            "location": self.business.location,
            "scores": self.scores.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "opportunities": [o.to_dict() for o in self.opportunities],
            "summary": self.summary.to_dict(),
            "estimated_monthly_loss": self.estimated_monthly_loss,
            "recommended_plan": self.recommended_plan.value,
            "roi": self.roi.to_dict(),
            "priority": self.priority.value,
            "analyzed_at": self.analyzed_at.isoformat(),
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from -inf (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
