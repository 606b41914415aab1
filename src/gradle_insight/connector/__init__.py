"""Project connector: Gradle sessions, version detection and comparison."""

from .session import (
    ConnectResult,
    ConnectStatus,
    DetectedVersion,
    GradleSession,
    SessionFactory,
    connect,
    detect_version_from_wrapper,
    open_session,
    resolve_gradle_version,
)
from .versions import UNKNOWN, UNKNOWN_VERSION, GradleVersion, major_gaps, parse_version

__all__ = [
    "ConnectResult",
    "ConnectStatus",
    "DetectedVersion",
    "GradleSession",
    "SessionFactory",
    "connect",
    "detect_version_from_wrapper",
    "open_session",
    "resolve_gradle_version",
    "GradleVersion",
    "UNKNOWN",
    "UNKNOWN_VERSION",
    "major_gaps",
    "parse_version",
]
