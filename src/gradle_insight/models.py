"""Data models shared across the analysis engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Dialect(Enum):
    """Build script dialect, decided by file name."""

    GROOVY = "groovy"
    KOTLIN = "kotlin"


class ComplexityTier(Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class Strategy(Enum):
    """Balance between automated and human-assisted remediation."""

    PRIMARY_AUTOMATED = "PRIMARY_AUTOMATED"
    PRIMARY_ASSISTED = "PRIMARY_ASSISTED"
    HYBRID = "HYBRID"

    @property
    def label(self) -> str:
        return _STRATEGY_LABELS[self]


_STRATEGY_LABELS = {
    Strategy.PRIMARY_AUTOMATED: "OpenRewrite (primary) + assisted review (fallback)",
    Strategy.PRIMARY_ASSISTED: "Assisted review (primary) + OpenRewrite (optional)",
    Strategy.HYBRID: "Hybrid: OpenRewrite bulk + assisted edge cases",
}


class Engine(Enum):
    """Who carries out a migration step."""

    GIT = "GIT"
    OPENREWRITE = "OPENREWRITE"
    ASSISTED = "ASSISTED"
    GRADLE = "GRADLE"


MANUAL = "Manual"


@dataclass(frozen=True)
class BuildEnvironment:
    """Environment metadata reported by the Gradle launcher."""

    gradle_version: str
    java_version: Optional[str] = None
    java_home: Optional[str] = None


@dataclass(frozen=True)
class BuildFile:
    """A scanned build or settings script."""

    path: str  # relative to the project root, POSIX separators
    dialect: Dialect
    is_settings: bool = False


@dataclass(frozen=True)
class ProjectSnapshot:
    """Immutable facts about the analyzed build, created once per invocation."""

    gradle_version: str
    module_count: int
    groovy_files: int
    kotlin_files: int
    total_lines: int

    @property
    def total_files(self) -> int:
        return self.groovy_files + self.kotlin_files


@dataclass
class Finding:
    """One matcher hit in one build file.

    ``occurrences`` starts at 1 and is only incremented on the copies the
    recipe generator keeps as group representatives.
    """

    file: str
    line: int
    category: str
    pattern: str
    matched_text: str
    description: str
    suggested_fix: str
    transformation: str
    config: dict[str, str] = field(default_factory=dict)
    severity: float = 0.5
    occurrences: int = 1

    @property
    def is_manual(self) -> bool:
        return self.transformation == MANUAL

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass
class MigrationStep:
    order: int
    description: str
    engine: Engine
    estimate: str
    optional: bool = False


@dataclass
class AnalysisReport:
    """Everything one ``analyze`` invocation produces."""

    project_path: str
    snapshot: ProjectSnapshot
    category_counts: dict[str, int]
    complexity: ComplexityTier
    strategy: Strategy
    migration_plan: list[MigrationStep]
    recipe: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return sum(self.category_counts.values())


@dataclass
class Suggestion:
    recipe: str
    description: str
    confidence: float
    options: Optional[str] = None


@dataclass
class SuggestionReport:
    project_path: str
    gradle_version: str
    suggestions: list[Suggestion] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecipeInfo:
    name: str
    description: str
    options: tuple[str, ...] = ()


@dataclass
class RecipeListing:
    filter: Optional[str]
    recipes: list[RecipeInfo]


@dataclass
class TransformationGroup:
    """Findings sharing one (transformation, config) key.

    ``representative`` is a copy of the first Finding seen; its
    ``occurrences`` counts every member of the group.
    """

    representative: Finding
    locations: list[str] = field(default_factory=list)

    @property
    def transformation(self) -> str:
        return self.representative.transformation

    @property
    def occurrences(self) -> int:
        return self.representative.occurrences


@dataclass
class GeneratedRecipe:
    project_path: str
    message: str
    groups: list[TransformationGroup] = field(default_factory=list)
    recipe: Optional[str] = None
    output_file: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def manual_count(self) -> int:
        return sum(1 for g in self.groups if g.representative.is_manual)

    @property
    def automated_count(self) -> int:
        return len(self.groups) - self.manual_count


@dataclass
class BuildOutcome:
    """Raw result of one Gradle build invocation."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None


@dataclass
class RunResult:
    project_path: str
    gradle_version: str
    recipes: list[str]
    dry_run: bool
    success: bool = False
    error: Optional[str] = None
    duration_ms: int = 0
    changes_detected: int = 0
    changed_files: list[str] = field(default_factory=list)
    recipes_executed: bool = False
    restored_files: list[str] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    warnings: list[str] = field(default_factory=list)
