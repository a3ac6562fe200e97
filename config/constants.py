"""
Static scoring tables: global category weights, remediation plans and
sales-priority thresholds. Built once at import and never mutated.
"""

from types import MappingProxyType

from models.schemas import Category, PlanInfo, PlanTier, PriorityTier

# Need not sum to 1; normalized at use time.
GLOBAL_WEIGHTS = MappingProxyType({
    Category.PERFORMANCE: 0.25,
    Category.MOBILE: 0.20,
    Category.SEO: 0.20,
    Category.CONVERSION: 0.20,
    Category.CONTENT: 0.15,
})

PLANS = MappingProxyType({
    PlanTier.SIMPLE: PlanInfo(
        tier=PlanTier.SIMPLE,
        name="Simple Plan",
        features=(
            "Basic SEO fixes",
            "Mobile support",
            "Page speed improvements",
            "Monthly update support",
        ),
        target_score=60,
        monthly_price=30000,
    ),
    PlanTier.STANDARD: PlanInfo(
        tier=PlanTier.STANDARD,
        name="Standard Plan",
        features=(
            "Everything in Simple",
            "Advanced SEO",
            "Conversion optimization",
            "Twice-monthly update support",
            "Traffic analytics report",
        ),
        target_score=75,
        monthly_price=50000,
    ),
    PlanTier.PREMIUM: PlanInfo(
        tier=PlanTier.PREMIUM,
        name="Premium Plan",
        features=(
            "Everything in Standard",
            "Custom design",
            "A/B testing",
            "Weekly update support",
            "Dedicated consultant",
        ),
        target_score=90,
        monthly_price=100000,
    ),
})

# Plan recommendation: total < PREMIUM_BELOW → Premium, < STANDARD_BELOW → Standard.
PREMIUM_BELOW = 40
STANDARD_BELOW = 70

# First match wins, checked in this order. Loss thresholds are absolute.
PRIORITY_THRESHOLDS = (
    (PriorityTier.HIGH, MappingProxyType({"score_max": 40, "monthly_loss_min": 100000})),
    (PriorityTier.MEDIUM, MappingProxyType({"score_max": 60, "monthly_loss_min": 50000})),
)
