"""Pattern registry and issue detection."""

from .detector import (
    DetectionResult,
    IssueDetector,
    count_categories,
    detect_in_content,
    line_number,
)
from .registry import (
    PATTERNS,
    PatternDefinition,
    categories,
    manual_categories,
)

__all__ = [
    "DetectionResult",
    "IssueDetector",
    "count_categories",
    "detect_in_content",
    "line_number",
    "PATTERNS",
    "PatternDefinition",
    "categories",
    "manual_categories",
]
