"""
End-to-end pipeline tests using mock signals.
Run with: python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agents.base import Agent, AnalysisState, Orchestrator
from agents.opportunities import OpportunityCalculatorAgent
from agents.plans import PlanRecommenderAgent
from agents.priority import PriorityClassifierAgent, classify_priority
from agents.scoring import ScoreAggregationAgent
from agents.signals import MockSignalSource, SignalSource
import db.database
from db.database import get_analysis, list_analyses, save_analysis
from db.models import AnalysisRecord, Base
from models.schemas import (
    BusinessInfo, Category, CategoryResult, Effort, InvalidInputError, Issue,
    Opportunity, PageSignals, PlanTier, PriorityTier, Severity,
)
from utils.pipeline import (
    analyze_and_store, analyze_business, analyze_businesses, build_orchestrator, run_analysis,
)


def make_signals(url="https://example.com", industry="default", secure=True, revenue=None, **scores):
    defaults = {"performance": 20, "mobile": 80, "seo": 80, "conversion": 80, "content": 80}
    defaults.update(scores)
    return PageSignals(
        business=BusinessInfo(url=url, business_name="Example", industry=industry),
        is_secure_transport=secure,
        results={
            c: CategoryResult(category=c, score=defaults[c.key]) for c in Category
        },
        current_monthly_revenue=revenue,
    )


# ─── Fixtures ────────────────────────────────────────────────────────────────

@pytest.fixture
def reference_signals():
    return make_signals()


@pytest.fixture
def weak_signals():
    signals = make_signals(
        url="http://weak.example", industry="restaurant",
        performance=25, mobile=30, seo=35, conversion=20, content=30,
    )
    signals.results[Category.CONVERSION].opportunities = [
        Opportunity("Make the phone number tappable", "tel: links", 30, 40000, Effort.LOW, 10),
        Opportunity("Add online reservations", "", 25, 60000, Effort.MEDIUM, 9),
    ]
    signals.results[Category.SEO].issues = [
        Issue(Category.SEO, Severity.HIGH, "No meta description", "Lower CTR", "Add one"),
    ]
    return signals


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine)()
    yield db
    db.close()


# ─── Pipeline Tests ──────────────────────────────────────────────────────────

class TestRunAnalysis:
    def test_reference_scenario(self, reference_signals):
        result = run_analysis(reference_signals)
        assert result.scores.total == 65
        assert result.opportunities == []
        assert result.estimated_monthly_loss == 0
        assert result.priority == PriorityTier.LOW
        assert result.recommended_plan == PlanTier.STANDARD
        assert result.roi.monthly_investment == 50000

    def test_weak_site(self, weak_signals):
        result = run_analysis(weak_signals)
        assert result.scores.total < 30
        assert result.priority == PriorityTier.HIGH
        assert result.recommended_plan == PlanTier.PREMIUM
        assert 0 < len(result.opportunities) <= 10
        assert result.opportunities[0].priority == 10
        assert result.estimated_monthly_loss == sum(o.estimated_revenue_lift for o in result.opportunities)
        assert result.summary.total_monthly_revenue_lift == result.estimated_monthly_loss

    def test_issues_passed_through(self, weak_signals):
        result = run_analysis(weak_signals)
        assert len(result.issues) == 1
        assert result.issues[0] is weak_signals.results[Category.SEO].issues[0]

    def test_explicit_revenue_drives_roi(self):
        result = run_analysis(make_signals(revenue=1000000))
        assert result.roi.estimated_monthly_return == pytest.approx(50000)

    def test_priority_matches_classifier(self, weak_signals):
        result = run_analysis(weak_signals)
        assert result.priority == classify_priority(result.scores.total, result.estimated_monthly_loss)

    def test_invalid_signals_raise(self):
        signals = make_signals()
        del signals.results[Category.MOBILE]
        with pytest.raises(InvalidInputError):
            run_analysis(signals)

    def test_result_serializes(self, weak_signals):
        data = run_analysis(weak_signals).to_dict()
        assert data["priority"] == "High"
        assert data["recommended_plan"] == "Premium"
        assert data["scores"]["total"] < 30
        assert isinstance(data["opportunities"], list)


class TestMockSignalSource:
    def test_same_url_same_signals(self):
        source = MockSignalSource()
        a = source.collect(BusinessInfo(url="https://cafe.example"))
        b = source.collect(BusinessInfo(url="https://cafe.example"))
        assert {c: r.score for c, r in a.results.items()} == {c: r.score for c, r in b.results.items()}

    def test_transport_flag_from_scheme(self):
        source = MockSignalSource()
        assert source.collect(BusinessInfo(url="https://a.example")).is_secure_transport
        assert not source.collect(BusinessInfo(url="http://a.example")).is_secure_transport

    def test_every_category_present(self):
        signals = MockSignalSource().collect(BusinessInfo(url="https://b.example"))
        assert set(signals.results) == set(Category)
        for result in signals.results.values():
            assert 0 <= result.score <= 100

    def test_analyze_business_end_to_end(self):
        result = analyze_business(BusinessInfo(url="https://salon.example", industry="beauty"))
        assert 0 <= result.scores.total <= 100
        assert len(result.opportunities) <= 10


class _BrokenSource(SignalSource):
    def collect(self, business):
        signals = MockSignalSource().collect(business)
        if "broken" in business.url:
            signals.results.pop(Category.SEO)
        return signals


class TestAnalyzeBusinesses:
    def test_failed_page_is_skipped(self):
        results = analyze_businesses(
            [
                BusinessInfo(url="https://ok.example"),
                BusinessInfo(url="https://broken.example"),
                BusinessInfo(url="https://also-ok.example"),
            ],
            source=_BrokenSource(),
        )
        assert [r.url for r in results] == ["https://ok.example", "https://also-ok.example"]

    def test_empty_batch(self):
        assert analyze_businesses([]) == []


# ─── Orchestrator Tests ──────────────────────────────────────────────────────

class _ExplodingAgent(Agent):
    def __init__(self):
        super().__init__(name="ExplodingAgent")

    def run(self, state):
        raise RuntimeError("boom")


class TestOrchestrator:
    def test_all_agents_run_in_order(self, reference_signals):
        pipeline = build_orchestrator()
        result = pipeline.execute(AnalysisState(signals=reference_signals))
        assert result.success
        assert [r.agent_name for r in pipeline.run_history] == [
            "ScoreAggregationAgent",
            "OpportunityCalculatorAgent",
            "PriorityClassifierAgent",
            "PlanRecommenderAgent",
        ]
        assert "Pipeline Summary" in pipeline.summary()

    def test_stops_on_failure(self, reference_signals):
        pipeline = Orchestrator([ScoreAggregationAgent(), _ExplodingAgent(), PriorityClassifierAgent()])
        result = pipeline.execute(AnalysisState(signals=reference_signals))
        assert not result.success
        assert result.error == "boom"
        assert len(pipeline.run_history) == 2

    def test_downstream_agent_requires_scores(self, reference_signals):
        result = OpportunityCalculatorAgent().execute(AnalysisState(signals=reference_signals))
        assert not result.success

    def test_custom_agents(self, reference_signals):
        pipeline = Orchestrator([
            ScoreAggregationAgent(),
            OpportunityCalculatorAgent(limit=3),
            PriorityClassifierAgent(),
            PlanRecommenderAgent(),
        ])
        result = pipeline.execute(AnalysisState(signals=reference_signals))
        assert result.success
        assert result.data.recommended_plan == PlanTier.STANDARD


# ─── Persistence Tests ───────────────────────────────────────────────────────

class TestPersistence:
    def test_save_and_load(self, session, weak_signals):
        result = run_analysis(weak_signals)
        record = save_analysis(session, result)
        session.commit()

        loaded = get_analysis(session, record.analysis_id)
        assert loaded is not None
        data = loaded.to_dict()
        assert data["url"] == "http://weak.example"
        assert data["scores"] == result.scores.to_dict()
        assert data["priority"] == "High"
        assert len(data["opportunities"]) == len(result.opportunities)

    def test_list_filters_by_priority(self, session, reference_signals, weak_signals):
        save_analysis(session, run_analysis(reference_signals))
        save_analysis(session, run_analysis(weak_signals))
        session.commit()

        assert len(list_analyses(session)) == 2
        high = list_analyses(session, priority="High")
        assert [r.url for r in high] == ["http://weak.example"]

    def test_missing_analysis(self, session):
        assert get_analysis(session, 999) is None

    def test_tier_stored_in_single_column(self):
        columns = set(AnalysisRecord.__table__.columns.keys())
        assert "priority" in columns
        assert "is_high_priority" not in columns


class TestAnalyzeAndStore:
    @pytest.fixture
    def session_factory(self, monkeypatch):
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=engine)
        factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        monkeypatch.setattr(db.database, "SessionLocal", factory)
        return factory

    def test_batch_is_committed(self, session_factory):
        ids = analyze_and_store(
            [BusinessInfo(url="https://ok.example"), BusinessInfo(url="https://also-ok.example")]
        )
        assert len(ids) == 2

        session = session_factory()
        try:
            stored = list_analyses(session)
            assert {r.analysis_id for r in stored} == set(ids)
        finally:
            session.close()

    def test_failed_pages_are_not_stored(self, session_factory):
        ids = analyze_and_store(
            [BusinessInfo(url="https://broken.example"), BusinessInfo(url="https://ok.example")],
            source=_BrokenSource(),
        )
        assert len(ids) == 1

        session = session_factory()
        try:
            assert [r.url for r in list_analyses(session)] == ["https://ok.example"]
        finally:
            session.close()
