"""Complexity classification from module and build file counts."""

from ..config import DEFAULT_THRESHOLDS, ComplexityThresholds
from ..models import ComplexityTier, ProjectSnapshot


def classify_complexity(
    module_count: int,
    file_count: int,
    thresholds: ComplexityThresholds = DEFAULT_THRESHOLDS,
) -> ComplexityTier:
    """LARGE, then MEDIUM, then SMALL; first matching rule wins.

    >>> classify_complexity(3, 5)
    <ComplexityTier.SMALL: 'SMALL'>
    """
    if module_count > thresholds.large_modules or file_count > thresholds.large_files:
        return ComplexityTier.LARGE
    if module_count > thresholds.medium_modules or file_count > thresholds.medium_files:
        return ComplexityTier.MEDIUM
    return ComplexityTier.SMALL


def classify_snapshot(
    snapshot: ProjectSnapshot, thresholds: ComplexityThresholds = DEFAULT_THRESHOLDS
) -> ComplexityTier:
    return classify_complexity(snapshot.module_count, snapshot.total_files, thresholds)
