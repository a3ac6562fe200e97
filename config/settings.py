"""
Configuration & Settings
Website Opportunity Scorer
"""

from pydantic import BaseModel


class Settings(BaseModel):
    # App
    APP_NAME: str = "Website Opportunity Scorer"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./site_analysis.db"

    # Transport-security penalty (applied before industry weighting)
    HTTP_PERFORMANCE_PENALTY: int = 10
    HTTP_SEO_PENALTY: int = 15

    # Opportunity ranking
    # REVENUE_BOOST_THRESHOLD is an absolute amount; it is not rescaled by the
    # industry revenue baseline the way raw opportunity lifts are.
    MAX_OPPORTUNITIES: int = 10
    LOW_SCORE_THRESHOLD: int = 50
    REVENUE_BOOST_THRESHOLD: float = 50000
    QUICK_WIN_MIN_IMPROVEMENT: float = 10
    HIGH_IMPACT_MIN_REVENUE: float = 30000
    HIGH_IMPACT_MIN_IMPROVEMENT: float = 25

    # ROI projection: ~0.5% revenue lift per score point gained
    ROI_RATE_PER_POINT: float = 0.005
    ROI_HORIZON_MONTHS: int = 36

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    RECENT_ANALYSES_LIMIT: int = 50


settings = Settings()
