"""
FastAPI Application Entry Point
Website Opportunity Scorer

Serves the scoring pipeline under /api/v1. On startup the analysis table is
created and the loaded industry profiles and plan tiers are logged, so a
misconfigured registry shows up before the first request.
"""

import logging
import sys
import os
from contextlib import asynccontextmanager

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from config.constants import PLANS
from config.industries import INDUSTRY_REGISTRY
from config.settings import settings
from db.database import init_db

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("api")

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Industry profiles: {', '.join(INDUSTRY_REGISTRY.ids())}")
    logger.info(
        "Plans: " + ", ".join(
            f"{tier.value} (target {plan.target_score}, {plan.monthly_price:,}/mo)"
            for tier, plan in PLANS.items()
        )
    )
    init_db()
    yield
    logger.info("Scorer API stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Turns per-category website quality signals into a composite score, "
        "ranked improvement opportunities with revenue impact, a sales-priority "
        "tier and a recommended remediation plan."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(router, prefix=API_PREFIX)


@app.get("/", tags=["System"])
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api": API_PREFIX,
        "industries": len(INDUSTRY_REGISTRY),
        "plans": [tier.value for tier in PLANS],
        "max_opportunities": settings.MAX_OPPORTUNITIES,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
