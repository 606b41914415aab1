"""Analysis-related exceptions: Gradle connection, versions, rendering, execution."""

from pathlib import Path
from typing import Optional

from .base import GradleInsightError


class AnalysisError(GradleInsightError):
    """Base class for analysis-related errors."""

    pass


class ProjectConnectionError(AnalysisError):
    """Raised when the Gradle model-query service cannot be reached."""

    def __init__(self, project: Path, reason: str):
        super().__init__(
            f"Cannot connect to Gradle build: {project}",
            details={"project": str(project), "reason": reason},
        )
        self.project = project
        self.reason = reason


class VersionParseError(AnalysisError):
    """Raised when a Gradle version string is malformed."""

    def __init__(self, version: str, reason: str = "expected major.minor[.patch]"):
        super().__init__(
            f"Cannot parse Gradle version: {version!r}",
            details={"version": version, "reason": reason},
        )
        self.version = version
        self.reason = reason


class FileAccessError(AnalysisError):
    """Raised when a build file cannot be read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class RenderError(AnalysisError):
    """Raised when a generated recipe cannot be written."""

    def __init__(self, target: Path, reason: str):
        super().__init__(
            f"Cannot write recipe: {target}",
            details={"target": str(target), "reason": reason},
        )
        self.target = target
        self.reason = reason


class ExecutionError(AnalysisError):
    """Raised when a recipe run cannot be prepared or launched."""

    def __init__(self, reason: str, init_script: Optional[Path] = None):
        details = {"reason": reason}
        if init_script:
            details["init_script"] = str(init_script)

        super().__init__(f"Recipe execution failed: {reason}", details=details)
        self.reason = reason
        self.init_script = init_script
