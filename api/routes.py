"""
FastAPI Route Handlers
Website Opportunity Scorer
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from api.schemas import (
    RunAnalysisRequest, AnalysisResponse, ROIRequest, ROIProjectionResponse,
    ClassifyPriorityRequest, PriorityResponse, PlanResponse, IndustryResponse,
    HealthResponse,
)
from agents.plans import estimate_roi, get_plan, improvement_potential, recommend_plan
from agents.priority import classify_priority
from agents.scoring import interpret_score, score_breakdown
from config.constants import PLANS
from config.industries import INDUSTRY_REGISTRY
from config.settings import settings
from db.database import get_db_dependency, get_analysis, list_analyses, save_analysis
from models.schemas import AnalysisResult, IndustryProfile, InvalidInputError, PriorityTier
from utils.pipeline import run_analysis

logger = logging.getLogger(__name__)

router = APIRouter()


def _analysis_response(result: AnalysisResult, analysis_id: Optional[int] = None) -> AnalysisResponse:
    breakdown = [
        {
            "category": item.category.value,
            "score": item.score,
            "weight": item.weight,
            "contribution": item.contribution,
            "interpretation": interpret_score(item.score, item.category.value),
        }
        for item in score_breakdown(result.scores)
    ]
    return AnalysisResponse(analysis_id=analysis_id, breakdown=breakdown, **result.to_dict())


def _industry_response(profile: IndustryProfile) -> IndustryResponse:
    return IndustryResponse(
        id=profile.id,
        weight_multipliers={c.key: m for c, m in profile.weight_multipliers.items()},
        keywords=sorted(profile.keywords),
        critical_elements=list(profile.critical_elements),
        average_monthly_revenue=profile.average_monthly_revenue,
    )


# ─── Health ──────────────────────────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    return HealthResponse(
        status="ok",
        version=settings.APP_VERSION,
        timestamp=datetime.utcnow(),
        industries=len(INDUSTRY_REGISTRY),
    )


# ─── Analysis ────────────────────────────────────────────────────────────────

@router.post("/analysis/run", response_model=AnalysisResponse, tags=["Analysis"])
def run_page_analysis(request: RunAnalysisRequest, db: Session = Depends(get_db_dependency)):
    """
    Score one page from its analyzer output:
    Aggregate → Rank opportunities → Classify priority → Recommend plan
    """
    try:
        result = run_analysis(request.to_signals())
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        logger.error(f"Analysis failed for {request.url}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    analysis_id = None
    if request.persist:
        record = save_analysis(db, result)
        db.commit()
        analysis_id = record.analysis_id

    return _analysis_response(result, analysis_id)


@router.get("/analyses", response_model=List[AnalysisResponse], tags=["Analysis"])
def get_analyses(
    limit: int = settings.RECENT_ANALYSES_LIMIT,
    priority: Optional[PriorityTier] = None,
    db: Session = Depends(get_db_dependency),
):
    """Most recent stored analyses, newest first."""
    records = list_analyses(db, limit=limit, priority=priority.value if priority else None)
    return [AnalysisResponse(**r.to_dict()) for r in records]


@router.get("/analyses/{analysis_id}", response_model=AnalysisResponse, tags=["Analysis"])
def get_analysis_by_id(analysis_id: int, db: Session = Depends(get_db_dependency)):
    record = get_analysis(db, analysis_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Analysis {analysis_id} not found.")
    return AnalysisResponse(**record.to_dict())


# ─── Priority ────────────────────────────────────────────────────────────────

@router.post("/priority/classify", response_model=PriorityResponse, tags=["Scoring"])
async def classify(request: ClassifyPriorityRequest):
    return PriorityResponse(
        priority=classify_priority(request.total_score, request.estimated_monthly_loss)
    )


# ─── Plans ───────────────────────────────────────────────────────────────────

@router.get("/plans", response_model=List[PlanResponse], tags=["Configuration"])
async def get_plans():
    return [PlanResponse(**plan.to_dict()) for plan in PLANS.values()]


@router.post("/plans/roi", response_model=ROIProjectionResponse, tags=["Scoring"])
async def project_roi(request: ROIRequest):
    """ROI projection for a plan (the recommended one when no plan is given)."""
    plan = request.plan or recommend_plan(request.current_score)
    roi = estimate_roi(
        request.current_score,
        plan,
        industry_id=request.industry,
        current_monthly_revenue=request.current_monthly_revenue,
    )
    return ROIProjectionResponse(
        plan=get_plan(plan).tier,
        improvement_potential=improvement_potential(request.current_score, plan),
        **roi.to_dict(),
    )


# ─── Industries ──────────────────────────────────────────────────────────────

@router.get("/industries", response_model=List[IndustryResponse], tags=["Configuration"])
async def get_industries():
    return [_industry_response(INDUSTRY_REGISTRY.get(i)) for i in INDUSTRY_REGISTRY.ids()]


@router.get("/industries/{industry_id}", response_model=IndustryResponse, tags=["Configuration"])
async def get_industry(industry_id: str):
    if industry_id not in INDUSTRY_REGISTRY:
        raise HTTPException(status_code=404, detail=f"Industry '{industry_id}' not found.")
    return _industry_response(INDUSTRY_REGISTRY.get(industry_id))
