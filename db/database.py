"""
Database engine, session management, and initialization.
"""

import logging
from contextlib import contextmanager
from typing import Generator, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from config.settings import settings
from db.models import Base, AnalysisRecord
from models.schemas import AnalysisResult

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {},
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create all tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized.")


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """Context manager for database sessions."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db_dependency() -> Generator[Session, None, None]:
    """FastAPI dependency injector."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ─── Analysis records ────────────────────────────────────────────────────────


def save_analysis(db: Session, result: AnalysisResult) -> AnalysisRecord:
    record = AnalysisRecord.from_result(result)
    db.add(record)
    db.flush()
    logger.info(f"Stored analysis #{record.analysis_id} for {result.url}")
    return record


def list_analyses(
    db: Session,
    limit: int = settings.RECENT_ANALYSES_LIMIT,
    priority: Optional[str] = None,
) -> List[AnalysisRecord]:
    query = db.query(AnalysisRecord)
    if priority:
        query = query.filter(AnalysisRecord.priority == priority)
    return (
        query.order_by(AnalysisRecord.analyzed_at.desc(), AnalysisRecord.analysis_id.desc())
        .limit(limit)
        .all()
    )


def get_analysis(db: Session, analysis_id: int) -> Optional[AnalysisRecord]:
    return db.get(AnalysisRecord, analysis_id)
