"""Tests for the exception hierarchy."""

from pathlib import Path

import pytest

from gradle_insight.exceptions import (
    AnalysisError,
    ConfigurationError,
    ExecutionError,
    FileAccessError,
    GradleInsightError,
    InvalidConfigError,
    InvalidInputError,
    InvalidPathError,
    ProjectConnectionError,
    RenderError,
    VersionParseError,
)


class TestHierarchy:
    """Every error is a GradleInsightError; input errors are configuration errors."""

    @pytest.mark.parametrize(
        "error",
        [
            ProjectConnectionError(Path("/p"), "refused"),
            VersionParseError("x"),
            FileAccessError(Path("/p/build.gradle"), "denied"),
            RenderError(Path("/p/.rewrite"), "read-only"),
            ExecutionError("cannot write init script"),
        ],
    )
    def test_analysis_errors(self, error):
        assert isinstance(error, AnalysisError)
        assert isinstance(error, GradleInsightError)

    def test_input_errors(self):
        error = InvalidPathError(Path("/missing"), "does not exist")
        assert isinstance(error, InvalidInputError)
        assert isinstance(error, ConfigurationError)
        assert isinstance(InvalidConfigError("workers", 0, "too small"), ConfigurationError)


class TestMessages:
    """Messages carry their details."""

    def test_details_appended(self):
        error = ProjectConnectionError(Path("/p"), "refused")
        assert str(error) == "Cannot connect to Gradle build: /p (project=/p, reason=refused)"

    def test_no_details(self):
        assert str(GradleInsightError("plain")) == "plain"

    def test_invalid_path(self):
        error = InvalidPathError(Path("/missing"), "does not exist")
        assert error.message == "Invalid input: does not exist"
        assert error.details == {"path": "/missing"}
        assert error.path == Path("/missing")

    def test_execution_error_with_script(self):
        error = ExecutionError("boom", init_script=Path("/tmp/init.gradle"))
        assert error.details["init_script"] == "/tmp/init.gradle"

    def test_version_parse_error(self):
        error = VersionParseError("abc")
        assert error.version == "abc"
        assert "major.minor" in error.reason
