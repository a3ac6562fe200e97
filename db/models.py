"""
SQLAlchemy ORM Models
Website Opportunity Scorer
"""

from sqlalchemy import (
    Column, Integer, Float, String, DateTime, JSON, Index
)
from sqlalchemy.orm import declarative_base
from datetime import datetime

from models.schemas import AnalysisResult

Base = declarative_base()


class AnalysisRecord(Base):
    """One finished page analysis. Raw artifacts (screenshots, logs) are not stored."""
    __tablename__ = "analysis"

    analysis_id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String(1000), nullable=False)
    business_name = Column(String(255))
    industry = Column(String(100))
    location = Column(String(255))

    total_score = Column(Integer)
    performance_score = Column(Integer)
    mobile_score = Column(Integer)
    seo_score = Column(Integer)
    conversion_score = Column(Integer)
    content_score = Column(Integer)

    estimated_monthly_loss = Column(Float)
    priority = Column(String(20))
    recommended_plan = Column(String(20))

    opportunities_json = Column(JSON)
    issues_json = Column(JSON)
    summary_json = Column(JSON)
    roi_json = Column(JSON)

    analyzed_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_analysis_url", "url"),
        Index("ix_analysis_priority", "priority"),
    )

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisRecord":
        data = result.to_dict()
        return cls(
            url=result.url,
            business_name=result.business.business_name,
            industry=result.business.industry,
            location=result.business.location,
            total_score=result.scores.total,
            performance_score=result.scores.performance,
            mobile_score=result.scores.mobile,
            seo_score=result.scores.seo,
            conversion_score=result.scores.conversion,
            content_score=result.scores.content,
            estimated_monthly_loss=result.estimated_monthly_loss,
            priority=result.priority.value,
            recommended_plan=result.recommended_plan.value,
            opportunities_json=data["opportunities"],
            issues_json=data["issues"],
            summary_json=data["summary"],
            roi_json=data["roi"],
            analyzed_at=result.analyzed_at,
        )

    def to_dict(self) -> dict:
        return {
            "analysis_id": self.analysis_id,
            "url": self.url,
            "business_name": self.business_name,
            "industry": self.industry,
            "location": self.location,
            "scores": {
                "total": self.total_score,
                "performance": self.performance_score,
                "mobile": self.mobile_score,
                "seo": self.seo_score,
                "conversion": self.conversion_score,
                "content": self.content_score,
            },
            "estimated_monthly_loss": self.estimated_monthly_loss,
            "priority": self.priority,
            "recommended_plan": self.recommended_plan,
            "opportunities": self.opportunities_json or [],
            "issues": self.issues_json or [],
            "summary": self.summary_json,
            "roi": self.roi_json,
            "analyzed_at": self.analyzed_at.isoformat() if self.analyzed_at else None,
        }
