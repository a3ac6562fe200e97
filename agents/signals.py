"""
Page Signal Sources
--------------------
Boundary to the page analyzers (DOM probing, performance APIs, screenshot
capture). The scoring agents only ever see the `PageSignals` a source
returns; how the signals were collected is the source's business.

Supported sources (v1):
  - Mock/demo mode for development and tests

Architecture:
  SignalSource.collect(business) -> PageSignals
"""

import hashlib
import logging
import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from models.schemas import (
    BusinessInfo, Category, CategoryResult, Effort, Issue, Opportunity,
    PageSignals, Severity,
)

logger = logging.getLogger(__name__)


class SignalSource(ABC):
    """Produces the five category results for one page."""

    @abstractmethod
    def collect(self, business: BusinessInfo) -> PageSignals:
        raise NotImplementedError


class MockSignalSource(SignalSource):
    """
    Generates deterministic analyzer output for development/demo.
    The same URL always yields the same signals.
    """

    # Score below which an analyzer reports its problems.
    THRESHOLDS = {
        Category.PERFORMANCE: 50,
        Category.MOBILE: 70,
        Category.SEO: 60,
        Category.CONVERSION: 50,
        Category.CONTENT: 40,
    }

    # title, description, improvement %, revenue lift, effort, priority
    CATALOG: Dict[Category, List[Tuple[str, str, float, float, Effort, int]]] = {
        Category.PERFORMANCE: [
            ("Reduce unused JavaScript", "Defer or drop scripts not needed for first paint", 15, 50000, Effort.MEDIUM, 7),
            ("Serve images in next-gen formats", "Convert large JPEG/PNG assets to WebP or AVIF", 25, 30000, Effort.LOW, 6),
            ("Improve server response time", "Cache rendered pages and upgrade hosting", 20, 50000, Effort.HIGH, 6),
        ],
        Category.SEO: [
            ("Write a descriptive title tag", "Include the business name and main service in the title", 10, 25000, Effort.LOW, 8),
            ("Add a meta description", "Summarize the page in 120-160 characters for search results", 8, 15000, Effort.LOW, 7),
            ("Add structured data", "Mark up LocalBusiness details with schema.org JSON-LD", 12, 30000, Effort.MEDIUM, 7),
        ],
        Category.MOBILE: [
            ("Implement responsive web design", "Make every layout adapt to phone and tablet screens", 35, 80000, Effort.HIGH, 10),
            ("Add a viewport meta tag", "Let mobile browsers scale the page correctly", 25, 30000, Effort.LOW, 9),
            ("Optimize touch targets", "Enlarge buttons and links to at least 48px", 15, 25000, Effort.MEDIUM, 7),
        ],
        Category.CONVERSION: [
            ("Make the phone number tappable", "Wrap phone numbers in tel: links", 30, 40000, Effort.LOW, 10),
            ("Add online reservations", "Accept bookings around the clock", 25, 60000, Effort.MEDIUM, 9),
            ("Optimize call-to-action buttons", "Make the primary CTA prominent above the fold", 20, 30000, Effort.MEDIUM, 8),
        ],
        Category.CONTENT: [
            ("Publish customer testimonials", "Show reviews and case studies to build trust", 20, 30000, Effort.LOW, 9),
            ("Create an FAQ section", "Answer the questions customers ask before calling", 15, 20000, Effort.LOW, 8),
            ("Expand page content", "Describe services, pricing and staff in more depth", 20, 40000, Effort.MEDIUM, 8),
        ],
    }

    def __init__(self, current_monthly_revenue: Optional[float] = None):
        self.current_monthly_revenue = current_monthly_revenue

    def _rng(self, url: str) -> random.Random:
        seed = int(hashlib.sha256(url.encode()).hexdigest()[:16], 16)
        return random.Random(seed)

    def _category_result(self, category: Category, score: int) -> CategoryResult:
        threshold = self.THRESHOLDS[category]
        if score >= threshold:
            return CategoryResult(category=category, score=score)

        opportunities = [
            Opportunity(
                title=title,
                description=description,
                estimated_improvement_pct=improvement,
                estimated_revenue_lift=lift,
                effort=effort,
                priority=priority,
            )
            for title, description, improvement, lift, effort, priority in self.CATALOG[category]
        ]
        severity = Severity.CRITICAL if score < threshold / 2 else Severity.HIGH
        issues = [
            Issue(
                category=category,
                severity=severity,
                description=f"{category.value} score {score} is below {threshold}",
                impact=f"Weak {category.value.lower()} costs visitors and enquiries",
                solution=self.CATALOG[category][0][1],
            )
        ]
        return CategoryResult(category=category, score=score, opportunities=opportunities, issues=issues)

    def collect(self, business: BusinessInfo) -> PageSignals:
        rng = self._rng(business.url)
        results = {
            category: self._category_result(category, rng.randint(15, 95))
            for category in Category
        }
        logger.info(
            f"Mock signals for {business.url}: "
            + " ".join(f"{c.key}={r.score}" for c, r in results.items())
        )
        return PageSignals(
            business=business,
            is_secure_transport=business.url.lower().startswith("https://"),
            results=results,
            current_monthly_revenue=self.current_monthly_revenue,
        )
