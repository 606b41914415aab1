"""Migration plan construction.

Steps are numbered as they are appended and never reordered. A plan always
opens with a recovery checkpoint and closes with build verification.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from ..connector.versions import GradleVersion, is_older_than, major_gaps
from ..models import Engine, MigrationStep, ProjectSnapshot
from ..patterns.registry import PATTERNS, PatternDefinition, manual_categories

LEGACY_PLUGIN_CATEGORY = "legacy_apply_plugin"


class MigrationPlanBuilder:
    """Append-only step list with sequential order numbers."""

    def __init__(self) -> None:
        self._steps: list[MigrationStep] = []

    def add(
        self, description: str, engine: Engine, estimate: str, optional: bool = False
    ) -> "MigrationPlanBuilder":
        self._steps.append(
            MigrationStep(
                order=len(self._steps) + 1,
                description=description,
                engine=engine,
                estimate=estimate,
                optional=optional,
            )
        )
        return self

    def build(self) -> list[MigrationStep]:
        return list(self._steps)


def manual_issue_count(
    category_counts: Mapping[str, int], patterns: Sequence[PatternDefinition] = PATTERNS
) -> int:
    manual = manual_categories(tuple(patterns))
    return sum(count for category, count in category_counts.items() if category in manual)


def build_migration_plan(
    snapshot: ProjectSnapshot,
    version: GradleVersion,
    target: GradleVersion,
    category_counts: Mapping[str, int],
    unknown_version_gap: int = 2,
    patterns: Sequence[PatternDefinition] = PATTERNS,
) -> list[MigrationStep]:
    """Ordered remediation steps for one project.

    Args:
        snapshot: Project facts (dialect file counts)
        version: Detected Gradle version (UNKNOWN counts as older than any target)
        target: Gradle version the migration aims at
        category_counts: Per-category finding counts
        unknown_version_gap: Majors assumed behind target for UNKNOWN versions
        patterns: Registry used to tell manual categories apart

    Returns:
        Steps numbered from 1 in append order
    """
    plan = MigrationPlanBuilder()
    plan.add("Create recovery checkpoint", Engine.GIT, "< 1 min")

    target_major = GradleVersion(target.major, 0, 0)
    if is_older_than(version, target_major):
        plan.add(f"Update Gradle wrapper to {target}", Engine.OPENREWRITE, "< 1 min")
        for old, new in major_gaps(version, target, unknown_version_gap):
            plan.add(
                f"Migrate deprecated APIs (Gradle {old}→{new})",
                Engine.OPENREWRITE,
                "2-5 min",
            )

    if category_counts.get(LEGACY_PLUGIN_CATEGORY, 0) > 0:
        plan.add("Migrate to plugins block", Engine.OPENREWRITE, "1-2 min")

    if snapshot.groovy_files > 0:
        plan.add("Migrate to Kotlin DSL (optional)", Engine.OPENREWRITE, "varies", optional=True)

    manual = manual_issue_count(category_counts, patterns)
    if manual > 0:
        plan.add(f"Fix {manual} manual-review issues", Engine.ASSISTED, "5-10 min")

    plan.add("Verify build", Engine.GRADLE, "2-5 min")
    plan.add("Run tests", Engine.GRADLE, "varies")
    return plan.build()
