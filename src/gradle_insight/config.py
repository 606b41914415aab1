"""Configuration loading and management for Gradle Insight.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.gradle-insight.toml)
    3. Project config (<project>/gradle-insight.toml)
    4. Explicit config file
    5. Environment variables (GRADLE_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

The resulting AnalysisConfig is passed explicitly to every component entry
point; nothing reads process-wide flags.

Example:
    >>> config = load_config(verbose=True, json_output=True)
    >>> config.verbosity
    'verbose'
    >>> config.json_output
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILE_NAME = "gradle-insight.toml"
ENV_PREFIX = "GRADLE_INSIGHT_"


@dataclass(frozen=True)
class ComplexityThresholds:
    """Complexity tier and strategy boundaries.

    A tier is chosen by the first rule that matches, LARGE before MEDIUM.
    Both inputs are compared with strict ">" so that raising either the
    module count or the file count can only move a project up a tier.

    Attributes:
        large_modules: Module count above which a project is LARGE
        large_files: Build file count above which a project is LARGE
        medium_modules: Module count above which a project is MEDIUM
        medium_files: Build file count above which a project is MEDIUM
        assisted_issue_limit: SMALL projects with fewer issues than this are
            handled primarily by assisted (human-in-the-loop) review
    """

    large_modules: int = 50
    large_files: int = 100
    medium_modules: int = 10
    medium_files: int = 15
    assisted_issue_limit: int = 20

    def __post_init__(self) -> None:
        if self.medium_modules > self.large_modules:
            raise ValueError("medium_modules must not exceed large_modules")
        if self.medium_files > self.large_files:
            raise ValueError("medium_files must not exceed large_files")
        if self.assisted_issue_limit < 0:
            raise ValueError("assisted_issue_limit must be non-negative")


DEFAULT_THRESHOLDS = ComplexityThresholds()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one engine invocation.

    Attributes:
        Migration target:
            target_version: Gradle version the migration plan aims at
            unknown_version_gap: Major versions assumed behind the target when
                the detected version is unknown

        Output control:
            json_output: Emit structured JSON instead of console text
            verbosity: Logging verbosity level
            output_dir: Directory (relative to the project) for generated recipes
            recipe_name: Fully-qualified name of the generated recipe
            log_file: File that receives full DEBUG logs (None = stderr only)

        Gradle connection:
            gradle_executable: Explicit launcher; default is ./gradlew, then gradle
            timeout_seconds: Upper bound for each launcher process

        Scanning:
            exclude_dirs: Directory names never descended into
            workers: Threads used to read and match build files (None = auto)

        Recipe execution:
            rewrite_plugin: Classpath coordinate of the OpenRewrite Gradle plugin
            additional_deps: Extra classpath entries for the init script
            fail_on_dry_run: Treat dry-run changes as a failure
    """

    target_version: str = "9.2.1"
    unknown_version_gap: int = 2

    json_output: bool = False
    verbosity: Verbosity = "normal"
    output_dir: str = ".rewrite"
    recipe_name: str = "com.generated.ProjectMigrations"
    log_file: Optional[str] = None

    gradle_executable: Optional[str] = None
    timeout_seconds: int = 300

    exclude_dirs: tuple[str, ...] = field(
        default_factory=lambda: ("build", ".gradle", ".toolcache", ".kotlin", ".git", ".idea")
    )
    workers: Optional[int] = None

    rewrite_plugin: str = "org.openrewrite:plugin:latest.release"
    additional_deps: tuple[str, ...] = ()
    fail_on_dry_run: bool = False

    thresholds: ComplexityThresholds = field(default_factory=ComplexityThresholds)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.target_version or not self.target_version[0].isdigit():
            raise ValueError("target_version must look like major.minor[.patch]")
        if self.unknown_version_gap < 1:
            raise ValueError("unknown_version_gap must be at least 1")
        if self.timeout_seconds < 1:
            raise ValueError("timeout_seconds must be at least 1")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if not self.output_dir:
            raise ValueError("output_dir must not be empty")
        if not self.recipe_name:
            raise ValueError("recipe_name must not be empty")

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"


DEFAULT_CONFIG = AnalysisConfig()


def load_config(
    project_root: Optional[Path] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        project_root: Analyzed project; its gradle-insight.toml is honoured
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so that unset CLI options keep file values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        InvalidConfigError: If a config source is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILE_NAME}"
    if global_config.is_file():
        merged.update(_load_toml_file(global_config))

    project_config = (project_root or Path.cwd()) / CONFIG_FILE_NAME
    if project_config.is_file():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.is_file():
            raise InvalidConfigError("config_file", config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    for key in ("exclude_dirs", "additional_deps"):
        if key in merged and isinstance(merged[key], (list, str)):
            merged[key] = _as_tuple(merged[key])

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = ComplexityThresholds(**thresholds)
        except (TypeError, ValueError) as e:
            raise InvalidConfigError("thresholds", thresholds, str(e))
    elif isinstance(thresholds, ComplexityThresholds):
        merged["thresholds"] = thresholds

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError("configuration", merged, str(e))


def _as_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(v) for v in value)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GRADLE_INSIGHT_* environment variables.

    Tuple fields (exclude_dirs, additional_deps) accept comma-separated values.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if origin is tuple:
        return _as_tuple(value)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    # Nested dataclasses are only configurable from TOML
    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        InvalidConfigError: If TOML parsing fails
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise InvalidConfigError("config_file", path, str(e))
