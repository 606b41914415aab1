"""Exception hierarchy for Gradle Insight."""

from .analysis import (
    AnalysisError,
    ExecutionError,
    FileAccessError,
    ProjectConnectionError,
    RenderError,
    VersionParseError,
)
from .base import GradleInsightError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidInputError,
    InvalidPathError,
)

__all__ = [
    "GradleInsightError",
    "AnalysisError",
    "ProjectConnectionError",
    "VersionParseError",
    "FileAccessError",
    "RenderError",
    "ExecutionError",
    "ConfigurationError",
    "InvalidInputError",
    "InvalidPathError",
    "InvalidConfigError",
]
