"""Remediation strategy recommendation."""

from ..config import DEFAULT_THRESHOLDS, ComplexityThresholds
from ..models import ComplexityTier, Strategy


def recommend_strategy(
    tier: ComplexityTier,
    total_issues: int,
    thresholds: ComplexityThresholds = DEFAULT_THRESHOLDS,
) -> Strategy:
    """Bulk automation at scale, assisted review when cheap, hybrid otherwise."""
    if tier is ComplexityTier.LARGE:
        return Strategy.PRIMARY_AUTOMATED
    if tier is ComplexityTier.SMALL and total_issues < thresholds.assisted_issue_limit:
        return Strategy.PRIMARY_ASSISTED
    return Strategy.HYBRID
