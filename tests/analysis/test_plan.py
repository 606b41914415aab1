"""Tests for analysis/plan.py - migration plan construction."""

from gradle_insight.analysis import MigrationPlanBuilder, build_migration_plan, manual_issue_count
from gradle_insight.connector.versions import UNKNOWN, parse_version
from gradle_insight.models import Engine, ProjectSnapshot

TARGET = parse_version("9.2.1")


def _snapshot(groovy=0, kotlin=5, modules=3, version="9.2.1"):
    return ProjectSnapshot(version, modules, groovy, kotlin, total_lines=100)


def _descriptions(plan):
    return [step.description for step in plan]


class TestMigrationPlanBuilder:
    """Test MigrationPlanBuilder."""

    def test_sequential_order(self):
        plan = (
            MigrationPlanBuilder()
            .add("a", Engine.GIT, "1 min")
            .add("b", Engine.GRADLE, "1 min", optional=True)
            .build()
        )
        assert [s.order for s in plan] == [1, 2]
        assert plan[1].optional


class TestBuildMigrationPlan:
    """Plan contents per project state."""

    def test_scenario_a_up_to_date_and_clean(self):
        plan = build_migration_plan(_snapshot(), parse_version("9.2.1"), TARGET, {})
        assert _descriptions(plan) == ["Create recovery checkpoint", "Verify build", "Run tests"]
        assert [s.engine for s in plan] == [Engine.GIT, Engine.GRADLE, Engine.GRADLE]

    def test_scenario_b_groovy_and_legacy_plugins(self):
        snapshot = _snapshot(groovy=19, kotlin=0, version="8.5")
        plan = build_migration_plan(
            snapshot, parse_version("8.5"), TARGET, {"legacy_apply_plugin": 4}
        )
        descriptions = _descriptions(plan)

        assert descriptions[0] == "Create recovery checkpoint"
        assert "Migrate to plugins block" in descriptions
        assert "Migrate to Kotlin DSL (optional)" in descriptions
        assert descriptions[-2:] == ["Verify build", "Run tests"]
        assert "Migrate deprecated APIs (Gradle 8→9)" in descriptions

    def test_starts_with_checkpoint_and_numbers_sequentially(self):
        plan = build_migration_plan(
            _snapshot(groovy=3),
            parse_version("6.9"),
            TARGET,
            {"legacy_apply_plugin": 1, "internal_api_usage": 2},
        )
        assert plan[0].engine is Engine.GIT
        assert [s.order for s in plan] == list(range(1, len(plan) + 1))

    def test_one_migration_step_per_major(self):
        plan = build_migration_plan(_snapshot(), parse_version("6.9"), TARGET, {})
        assert _descriptions(plan)[1:5] == [
            "Update Gradle wrapper to 9.2.1",
            "Migrate deprecated APIs (Gradle 6→7)",
            "Migrate deprecated APIs (Gradle 7→8)",
            "Migrate deprecated APIs (Gradle 8→9)",
        ]

    def test_same_major_older_minor_has_no_version_steps(self):
        plan = build_migration_plan(_snapshot(), parse_version("9.0"), TARGET, {})
        assert len(plan) == 3

    def test_unknown_version_is_treated_as_old(self):
        plan = build_migration_plan(_snapshot(), UNKNOWN, TARGET, {})
        assert "Update Gradle wrapper to 9.2.1" in _descriptions(plan)
        assert "Migrate deprecated APIs (Gradle 7→8)" in _descriptions(plan)

    def test_manual_issues_step(self):
        counts = {"internal_api_usage": 2, "project_file_operation": 1, "eager_task_create": 5}
        plan = build_migration_plan(_snapshot(), parse_version("9.2.1"), TARGET, counts)
        manual = [s for s in plan if s.engine is Engine.ASSISTED]
        assert len(manual) == 1
        assert manual[0].description == "Fix 3 manual-review issues"

    def test_kotlin_step_is_optional(self):
        plan = build_migration_plan(_snapshot(groovy=1), parse_version("9.2.1"), TARGET, {})
        kotlin = next(s for s in plan if "Kotlin" in s.description)
        assert kotlin.optional


class TestManualIssueCount:
    def test_ignores_automated_categories(self):
        assert manual_issue_count({"deprecated_convention": 2, "legacy_apply_plugin": 9}) == 2
