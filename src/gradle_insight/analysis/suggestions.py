"""Recipe suggestions for ``suggest`` mode.

Each suggestion names a catalog recipe and a confidence in [0, 1] that it
applies cleanly to the project.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from ..connector.versions import GradleVersion, is_older_than, major_gaps
from ..models import ProjectSnapshot, Suggestion
from ..recipes.catalog import (
    KOTLIN_DSL_RECIPE,
    PLUGINS_BLOCK_RECIPE,
    VERSION_CATALOG_RECIPE,
    WRAPPER_RECIPE,
    migrate_recipe,
)

VERSION_CATALOG_FILE = Path("gradle") / "libs.versions.toml"

# Categories fixed by the MigrateToGradleN recipes themselves
_VERSION_MIGRATION_CATEGORIES = ("eager_task_create", "deprecated_buildDir")


def suggest_recipes(
    project_dir: Path,
    snapshot: ProjectSnapshot,
    version: GradleVersion,
    target: GradleVersion,
    category_counts: Mapping[str, int],
    unknown_version_gap: int = 2,
) -> list[Suggestion]:
    suggestions: list[Suggestion] = []

    gaps: list[tuple[int, int]] = []
    if is_older_than(version, GradleVersion(target.major, 0, 0)):
        gaps = major_gaps(version, target, unknown_version_gap)
        suggestions.append(
            Suggestion(
                WRAPPER_RECIPE,
                f"Update Gradle wrapper to {target}",
                0.95,
                f"version={target}",
            )
        )
        for _, new in gaps:
            suggestions.append(
                Suggestion(migrate_recipe(new), f"Migrate deprecated APIs to Gradle {new}", 0.85)
            )

    if snapshot.groovy_files > 0:
        suggestions.append(
            Suggestion(
                KOTLIN_DSL_RECIPE,
                f"Migrate {snapshot.groovy_files} Groovy build files to Kotlin DSL",
                0.85,
            )
        )

    plugin_count = category_counts.get("legacy_apply_plugin", 0)
    if plugin_count > 0:
        suggestions.append(
            Suggestion(
                PLUGINS_BLOCK_RECIPE,
                f"Migrate {plugin_count} legacy plugin applications",
                0.9,
            )
        )

    deprecated = sum(category_counts.get(c, 0) for c in _VERSION_MIGRATION_CATEGORIES)
    if deprecated > 0:
        next_major = gaps[0][1] if gaps else target.major
        suggestions.append(
            Suggestion(
                migrate_recipe(next_major),
                f"Fix {deprecated} deprecated patterns (Gradle {next_major})",
                0.75,
            )
        )

    if not (project_dir / VERSION_CATALOG_FILE).is_file():
        suggestions.append(
            Suggestion(
                VERSION_CATALOG_RECIPE,
                "Create version catalog for centralized dependency management",
                0.7,
            )
        )

    return suggestions
