"""Analysis engine: one entry point per command.

``execute`` is the only place a Command is inspected. Every component
receives the AnalysisConfig explicitly, and the Gradle session factory can be
swapped out so the whole pipeline runs without a real Gradle install.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .analysis import (
    build_migration_plan,
    classify_snapshot,
    recommend_strategy,
    suggest_recipes,
)
from .commands import Analyze, Command, GenerateRecipe, ListRecipes, Run, Suggest
from .config import DEFAULT_CONFIG, AnalysisConfig
from .connector import (
    GradleVersion,
    SessionFactory,
    major_gaps,
    open_session,
    parse_version,
    resolve_gradle_version,
)
from .connector.versions import is_older_than
from .exceptions import InvalidConfigError, InvalidInputError, InvalidPathError, VersionParseError
from .logging_config import get_logger
from .models import (
    AnalysisReport,
    Dialect,
    Finding,
    GeneratedRecipe,
    ProjectSnapshot,
    RecipeListing,
    RunResult,
    SuggestionReport,
)
from .patterns import IssueDetector
from .recipes import RecipeGenerator, RecipeRunner, group_findings, list_recipes, migrate_recipe
from .recipes.generator import write_recipe
from .scanning import BuildFileScanner, count_modules

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2


@dataclass
class CommandOutcome:
    """Result object for the formatter plus the process exit code."""

    result: Any
    exit_code: int = EXIT_OK


@dataclass
class ProjectScan:
    """Intermediate state shared by analyze, suggest and generate-recipe."""

    project_dir: Path
    snapshot: ProjectSnapshot
    version: GradleVersion
    findings: list[Finding]
    category_counts: dict[str, int]
    warnings: list[str] = field(default_factory=list)


def validate_project_dir(path: Path) -> Path:
    """Resolve ``path`` and check that it is an existing directory.

    Raises:
        InvalidPathError: If the path does not exist or is not a directory
    """
    path = Path(path)
    if not path.exists():
        raise InvalidPathError(path, "does not exist")
    if not path.is_dir():
        raise InvalidPathError(path, "not a directory")
    return path.resolve()


def target_version(config: AnalysisConfig) -> GradleVersion:
    try:
        return parse_version(config.target_version)
    except VersionParseError as e:
        raise InvalidConfigError("target_version", config.target_version, str(e))


def scan_project(
    project_dir: Path,
    config: AnalysisConfig = DEFAULT_CONFIG,
    session_factory: SessionFactory = open_session,
) -> ProjectScan:
    """Scan build files, detect patterns and resolve the Gradle version."""
    warnings: list[str] = []

    build_files = BuildFileScanner(project_dir, config).scan()
    detection = IssueDetector(project_dir, config).detect(build_files)
    if detection.files_errored:
        warnings.append(f"{detection.files_errored} build file(s) could not be read")

    detected = resolve_gradle_version(project_dir, config, warnings, session_factory)

    snapshot = ProjectSnapshot(
        gradle_version=detected.text,
        module_count=count_modules(project_dir),
        groovy_files=sum(1 for f in build_files if f.dialect is Dialect.GROOVY),
        kotlin_files=sum(1 for f in build_files if f.dialect is Dialect.KOTLIN),
        total_lines=detection.total_lines,
    )
    logger.info(
        f"Project snapshot: Gradle {snapshot.gradle_version}, {snapshot.module_count} modules, "
        f"{snapshot.total_files} build files, {len(detection.findings)} findings"
    )

    return ProjectScan(
        project_dir=project_dir,
        snapshot=snapshot,
        version=detected.version,
        findings=detection.findings,
        category_counts=detection.category_counts(),
        warnings=warnings,
    )


def complementary_recipes(version: GradleVersion, config: AnalysisConfig) -> list[str]:
    """Standard MigrateToGradleN recipes for each major hop to the target."""
    target = target_version(config)
    if not is_older_than(version, GradleVersion(target.major, 0, 0)):
        return []
    return [
        migrate_recipe(new) for _, new in major_gaps(version, target, config.unknown_version_gap)
    ]


def render_scan_recipe(
    scan: ProjectScan, config: AnalysisConfig, generated_at: Optional[datetime] = None
) -> str:
    return RecipeGenerator(config).render(
        group_findings(scan.findings),
        complementary_recipes(scan.version, config),
        generated_at,
    )


# ── Commands ───────────────────────────────────────────────────


def analyze(
    project_dir: Path,
    config: AnalysisConfig = DEFAULT_CONFIG,
    session_factory: SessionFactory = open_session,
) -> AnalysisReport:
    scan = scan_project(project_dir, config, session_factory)
    tier = classify_snapshot(scan.snapshot, config.thresholds)
    strategy = recommend_strategy(tier, sum(scan.category_counts.values()), config.thresholds)
    plan = build_migration_plan(
        scan.snapshot,
        scan.version,
        target_version(config),
        scan.category_counts,
        config.unknown_version_gap,
    )
    return AnalysisReport(
        project_path=str(project_dir),
        snapshot=scan.snapshot,
        category_counts=scan.category_counts,
        complexity=tier,
        strategy=strategy,
        migration_plan=plan,
        recipe=render_scan_recipe(scan, config) if scan.findings else None,
        warnings=scan.warnings,
    )


def suggest(
    project_dir: Path,
    config: AnalysisConfig = DEFAULT_CONFIG,
    session_factory: SessionFactory = open_session,
) -> SuggestionReport:
    scan = scan_project(project_dir, config, session_factory)
    suggestions = suggest_recipes(
        project_dir,
        scan.snapshot,
        scan.version,
        target_version(config),
        scan.category_counts,
        config.unknown_version_gap,
    )
    return SuggestionReport(
        project_path=str(project_dir),
        gradle_version=scan.snapshot.gradle_version,
        suggestions=suggestions,
        warnings=scan.warnings,
    )


def generate_recipe(
    project_dir: Path,
    config: AnalysisConfig = DEFAULT_CONFIG,
    session_factory: SessionFactory = open_session,
) -> GeneratedRecipe:
    """Render and write the project recipe.

    Nothing is written when no pattern matched.

    Raises:
        RenderError: If the recipe file cannot be written
    """
    scan = scan_project(project_dir, config, session_factory)
    result = GeneratedRecipe(project_path=str(project_dir), message="", warnings=scan.warnings)

    if not scan.findings:
        result.message = "No project-specific patterns detected that require custom recipes"
        return result

    result.groups = group_findings(scan.findings)
    result.recipe = render_scan_recipe(scan, config)
    result.output_file = str(write_recipe(project_dir, config.output_dir, result.recipe))
    result.message = f"Generated custom recipe with {len(result.groups)} transformations"
    return result


def run_recipes(
    project_dir: Path,
    recipes: tuple[str, ...],
    dry_run: bool,
    config: AnalysisConfig = DEFAULT_CONFIG,
    session_factory: SessionFactory = open_session,
) -> RunResult:
    if not recipes:
        raise InvalidInputError("no recipes given; use --recipe name[,name...]")
    runner = RecipeRunner(config, session_factory)
    return runner.run(project_dir, recipes, dry_run)


def run_exit_code(result: RunResult, config: AnalysisConfig) -> int:
    if not result.success:
        return EXIT_FAILURE
    if result.dry_run and config.fail_on_dry_run and result.changes_detected > 0:
        return EXIT_FAILURE
    return EXIT_OK


def execute(
    command: Command,
    config: AnalysisConfig = DEFAULT_CONFIG,
    session_factory: SessionFactory = open_session,
) -> CommandOutcome:
    """Dispatch one command.

    Raises:
        InvalidInputError: For a missing project path or missing arguments
        RenderError: If generate-recipe cannot write its output
        ExecutionError: If run mode cannot write its init script
    """
    if isinstance(command, ListRecipes):
        return CommandOutcome(RecipeListing(command.filter, list_recipes(command.filter)))

    if isinstance(command, Suggest):
        project_dir = validate_project_dir(command.path)
        return CommandOutcome(suggest(project_dir, config, session_factory))

    if isinstance(command, GenerateRecipe):
        project_dir = validate_project_dir(command.path)
        return CommandOutcome(generate_recipe(project_dir, config, session_factory))

    if isinstance(command, Analyze):
        project_dir = validate_project_dir(command.path)
        report = analyze(project_dir, config, session_factory)
        return CommandOutcome(report, EXIT_FAILURE if report.total_issues > 0 else EXIT_OK)

    if isinstance(command, Run):
        project_dir = validate_project_dir(command.path)
        result = run_recipes(project_dir, command.recipes, command.dry_run, config, session_factory)
        return CommandOutcome(result, run_exit_code(result, config))

    raise TypeError(f"Unknown command: {command!r}")
