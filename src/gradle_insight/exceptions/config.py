"""Configuration and input exceptions: paths, settings, arguments."""

from pathlib import Path
from typing import Any

from .base import GradleInsightError


class ConfigurationError(GradleInsightError):
    """Base class for configuration-related errors."""

    pass


class InvalidInputError(ConfigurationError):
    """Raised when the invocation itself is unusable (exit code 2)."""

    def __init__(self, reason: str, **details: str):
        super().__init__(f"Invalid input: {reason}", details=dict(details))
        self.reason = reason


class InvalidPathError(InvalidInputError):
    """Raised when the project path is missing or not a directory."""

    def __init__(self, path: Path, reason: str):
        super().__init__(reason, path=str(path))
        self.path = path


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
