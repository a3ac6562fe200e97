"""
Pydantic schemas for API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Dict
from datetime import datetime

from models.schemas import (
    BusinessInfo, Category, CategoryResult, Effort, Issue, Opportunity,
    PageSignals, PlanTier, PriorityTier, Severity,
)


# ─── Request Schemas ─────────────────────────────────────────────────────────

class OpportunityRequest(BaseModel):
    title: str
    description: str = ""
    estimated_improvement_pct: float
    estimated_revenue_lift: float
    effort: Effort
    priority: int = Field(..., ge=1, le=10)

    def to_model(self) -> Opportunity:
        return Opportunity(
            title=self.title,
            description=self.description,
            estimated_improvement_pct=self.estimated_improvement_pct,
            estimated_revenue_lift=self.estimated_revenue_lift,
            effort=self.effort,
            priority=self.priority,
        )


class IssueRequest(BaseModel):
    severity: Severity
    description: str
    impact: str = ""
    solution: str = ""


class CategoryResultRequest(BaseModel):
    score: float
    opportunities: List[OpportunityRequest] = []
    issues: List[IssueRequest] = []

    def to_model(self, category: Category) -> CategoryResult:
        return CategoryResult(
            category=category,
            score=self.score,
            opportunities=[o.to_model() for o in self.opportunities],
            issues=[
                Issue(
                    category=category,
                    severity=i.severity,
                    description=i.description,
                    impact=i.impact,
                    solution=i.solution,
                )
                for i in self.issues
            ],
        )


class RunAnalysisRequest(BaseModel):
    url: str
    business_name: Optional[str] = None
    industry: Optional[str] = Field(None, description="restaurant | beauty | clinic | retail | legal | default")
    location: Optional[str] = None
    is_secure_transport: bool = True
    current_monthly_revenue: Optional[float] = Field(None, gt=0)
    performance: CategoryResultRequest
    mobile: CategoryResultRequest
    seo: CategoryResultRequest
    conversion: CategoryResultRequest
    content: CategoryResultRequest
    persist: bool = True

    def to_signals(self) -> PageSignals:
        return PageSignals(
            business=BusinessInfo(
                url=self.url,
                business_name=self.business_name,
                industry=self.industry,
                location=self.location,
            ),
            is_secure_transport=self.is_secure_transport,
            results={c: getattr(self, c.key).to_model(c) for c in Category},
            current_monthly_revenue=self.current_monthly_revenue,
        )


class ROIRequest(BaseModel):
    current_score: float = Field(..., ge=0, le=100)
    plan: Optional[PlanTier] = Field(None, description="Defaults to the recommended plan")
    industry: Optional[str] = None
    current_monthly_revenue: Optional[float] = Field(None, gt=0)


class ClassifyPriorityRequest(BaseModel):
    total_score: float = Field(..., ge=0, le=100)
    estimated_monthly_loss: float = Field(0, ge=0)


# ─── Response Schemas ────────────────────────────────────────────────────────

class ScoresResponse(BaseModel):
    total: int
    performance: int
    mobile: int
    seo: int
    conversion: int
    content: int


class OpportunityResponse(BaseModel):
    title: str
    description: str
    estimated_improvement_pct: float
    estimated_revenue_lift: float
    effort: str
    priority: int


class IssueResponse(BaseModel):
    category: str
    severity: str
    description: str
    impact: str
    solution: str


class SummaryResponse(BaseModel):
    total_monthly_revenue_lift: float
    total_improvement_pct: float
    quick_wins: List[str]
    high_impact: List[str]


class ROIResponse(BaseModel):
    monthly_investment: float
    estimated_monthly_return: float
    payback_period_months: int
    three_year_roi: int


class BreakdownResponse(BaseModel):
    category: str
    score: int
    weight: float
    contribution: int
    interpretation: str


class AnalysisResponse(BaseModel):
    analysis_id: Optional[int] = None
    url: str
    business_name: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    scores: ScoresResponse
    breakdown: List[BreakdownResponse] = []
    issues: List[IssueResponse]
    opportunities: List[OpportunityResponse]
    summary: Optional[SummaryResponse] = None
    estimated_monthly_loss: float
    recommended_plan: PlanTier
    roi: Optional[ROIResponse] = None
    priority: PriorityTier
    analyzed_at: datetime


class PriorityResponse(BaseModel):
    priority: PriorityTier


class PlanResponse(BaseModel):
    tier: PlanTier
    name: str
    features: List[str]
    target_score: int
    monthly_price: float


class ROIProjectionResponse(ROIResponse):
    plan: PlanTier
    improvement_potential: float


class IndustryResponse(BaseModel):
    id: str
    weight_multipliers: Dict[str, float]
    keywords: List[str]
    critical_elements: List[str]
    average_monthly_revenue: float


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
    industries: int
