"""Complexity classification, strategy, migration planning and suggestions."""

from .classifier import classify_complexity, classify_snapshot
from .plan import MigrationPlanBuilder, build_migration_plan, manual_issue_count
from .strategy import recommend_strategy
from .suggestions import suggest_recipes

__all__ = [
    "classify_complexity",
    "classify_snapshot",
    "MigrationPlanBuilder",
    "build_migration_plan",
    "manual_issue_count",
    "recommend_strategy",
    "suggest_recipes",
]
