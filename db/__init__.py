from .database import (
    init_db, get_db, get_db_dependency, engine, SessionLocal,
    save_analysis, list_analyses, get_analysis,
)
from .models import Base, AnalysisRecord

__all__ = [
    "init_db", "get_db", "get_db_dependency", "engine", "SessionLocal",
    "save_analysis", "list_analyses", "get_analysis",
    "Base", "AnalysisRecord",
]
