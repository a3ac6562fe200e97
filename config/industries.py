"""
Industry Profile Registry
--------------------------
Maps an industry id to its weight multipliers, domain keywords and the
average monthly revenue used to rescale opportunity estimates.

Unknown or missing ids resolve to the "default" profile.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from models.schemas import Category, IndustryProfile

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = "default"


def _profile(id, multipliers, keywords, critical_elements, revenue) -> IndustryProfile:
    performance, mobile, seo, conversion, content = multipliers
    return IndustryProfile(
        id=id,
        weight_multipliers=MappingProxyType({
            Category.PERFORMANCE: performance,
            Category.MOBILE: mobile,
            Category.SEO: seo,
            Category.CONVERSION: conversion,
            Category.CONTENT: content,
        }),
        keywords=frozenset(keywords),
        critical_elements=tuple(critical_elements),
        average_monthly_revenue=revenue,
    )


#                      perf  mobile seo  conv  content
_PROFILES = [
    _profile(
        "restaurant", (1.0, 1.2, 0.9, 1.3, 0.8),
        ["menu", "opening hours", "reservation", "access", "lunch", "dinner", "takeout"],
        ["menu", "hours", "reservation", "location"],
        3000000,
    ),
    _profile(
        "beauty", (0.9, 1.3, 1.0, 1.2, 1.0),
        ["pricing", "staff", "reservation", "cut", "color", "perm", "treatment"],
        ["pricing", "staff", "reservation", "gallery"],
        2000000,
    ),
    _profile(
        "clinic", (1.1, 1.1, 1.2, 1.0, 1.1),
        ["consultation hours", "departments", "reservation", "access", "doctors", "facilities", "insurance"],
        ["hours", "departments", "doctors", "access"],
        5000000,
    ),
    _profile(
        "retail", (1.2, 1.0, 1.1, 0.9, 1.0),
        ["opening hours", "products", "access", "stock", "sale", "new arrivals", "brands"],
        ["products", "hours", "location", "contact"],
        4000000,
    ),
    _profile(
        "legal", (0.8, 0.9, 1.3, 1.1, 1.3),
        ["consultation", "fees", "track record", "lawyers", "office hours", "access", "practice areas"],
        ["consultation", "lawyers", "expertise", "contact"],
        3500000,
    ),
    _profile(
        DEFAULT_INDUSTRY, (1.0, 1.0, 1.0, 1.0, 1.0),
        ["opening hours", "access", "pricing", "services", "company profile"],
        ["contact", "about", "services"],
        2500000,
    ),
]


class IndustryRegistry:
    """Read-only lookup of industry profiles with a guaranteed default."""

    def __init__(self, profiles: Iterable[IndustryProfile]):
        table = {p.id.lower(): p for p in profiles}
        if DEFAULT_INDUSTRY not in table:
            raise ValueError(f"Industry registry requires a '{DEFAULT_INDUSTRY}' profile")
        self._profiles: Mapping[str, IndustryProfile] = MappingProxyType(table)

    @property
    def default(self) -> IndustryProfile:
        return self._profiles[DEFAULT_INDUSTRY]

    def get(self, industry_id: Optional[str] = None) -> IndustryProfile:
        """Return the profile for `industry_id`, or the default profile."""
        key = (industry_id or "").strip().lower()
        profile = self._profiles.get(key)
        if profile is None:
            if key:
                logger.debug(f"Unknown industry '{industry_id}', using '{DEFAULT_INDUSTRY}'")
            return self.default
        return profile

    def ids(self) -> List[str]:
        return list(self._profiles)

    def __contains__(self, industry_id: object) -> bool:
        return isinstance(industry_id, str) and industry_id.strip().lower() in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


INDUSTRY_REGISTRY = IndustryRegistry(_PROFILES)
