"""Scoped sessions against a Gradle build's launcher.

A GradleSession resolves the launcher for a project (explicit executable,
the project's wrapper, or ``gradle`` on PATH) and issues read-only model
queries through it. Sessions are context managers: every process they spawn
is tracked and killed on close, whichever way the ``with`` block exits.

The connection outcome is reported as an explicit ConnectResult rather than
an exception, and resolve_gradle_version() handles it once, falling back to
the wrapper properties file when the launcher is unreachable.
"""

from __future__ import annotations

import os
import re
import shutil
import signal
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, ContextManager, Optional, Sequence

from ..config import AnalysisConfig
from ..exceptions import GradleInsightError, ProjectConnectionError, VersionParseError
from ..logging_config import get_logger
from ..models import BuildEnvironment, BuildOutcome
from .versions import UNKNOWN, UNKNOWN_VERSION, GradleVersion, parse_version

logger = get_logger(__name__)

WRAPPER_PROPERTIES = Path("gradle") / "wrapper" / "gradle-wrapper.properties"
_WRAPPER_VERSION_RE = re.compile(r"gradle-(\d+\.\d+(?:\.\d+)?)-")
_GRADLE_LINE_RE = re.compile(r"^Gradle\s+(\S+)\s*$", re.MULTILINE)
_JVM_LINE_RE = re.compile(r"^(?:Launcher )?JVM:\s+(.+?)\s*$", re.MULTILINE)


class GradleSession:
    """Model-query session bound to one project directory."""

    def __init__(self, project_dir: Path, config: AnalysisConfig):
        self.project_dir = Path(project_dir)
        self.config = config
        self._processes: list[subprocess.Popen] = []
        self._closed = False
        self._launcher = self._resolve_launcher()
        logger.debug(f"Opened Gradle session for {self.project_dir} via {self._launcher}")

    def __enter__(self) -> "GradleSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── Launcher ───────────────────────────────────────────────

    def _resolve_launcher(self) -> list[str]:
        if self.config.gradle_executable:
            return [self.config.gradle_executable]

        wrapper = self.project_dir / ("gradlew.bat" if os.name == "nt" else "gradlew")
        if wrapper.is_file():
            if os.name != "nt" and not os.access(wrapper, os.X_OK):
                return ["sh", str(wrapper)]
            return [str(wrapper)]

        gradle = shutil.which("gradle")
        if gradle:
            return [gradle]

        raise ProjectConnectionError(self.project_dir, "no gradlew wrapper and no gradle on PATH")

    def _spawn(self, args: Sequence[str]) -> subprocess.Popen:
        if self._closed:
            raise ProjectConnectionError(self.project_dir, "session already closed")
        try:
            proc = subprocess.Popen(
                [*self._launcher, *args],
                cwd=self.project_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                start_new_session=os.name != "nt",
            )
        except (OSError, ValueError) as e:
            raise ProjectConnectionError(self.project_dir, f"cannot start launcher: {e}")
        self._processes.append(proc)
        return proc

    def _communicate(self, proc: subprocess.Popen) -> tuple[str, str, bool]:
        """Wait for ``proc``; returns (stdout, stderr, timed_out).

        On timeout the launcher's whole process group is killed, so daemons
        or wrapper children holding the pipes cannot stretch the wait.

        Raises:
            ProjectConnectionError: If reading the launcher output fails
        """
        try:
            stdout, stderr = proc.communicate(timeout=self.config.timeout_seconds)
            return stdout or "", stderr or "", False
        except subprocess.TimeoutExpired:
            kill_process_tree(proc)
            stdout, stderr = proc.communicate()
            return stdout or "", stderr or "", True
        except (OSError, ValueError) as e:
            kill_process_tree(proc)
            proc.wait()
            raise ProjectConnectionError(self.project_dir, f"cannot read launcher output: {e}")

    # ── Queries ────────────────────────────────────────────────

    def build_environment(self) -> BuildEnvironment:
        """Ask the launcher for its Gradle and JVM versions.

        Raises:
            ProjectConnectionError: launcher failed, timed out or printed no version
        """
        proc = self._spawn(["--version", "--quiet"])
        stdout, stderr, timed_out = self._communicate(proc)
        if timed_out:
            raise ProjectConnectionError(
                self.project_dir, f"launcher timed out after {self.config.timeout_seconds}s"
            )

        if proc.returncode != 0:
            reason = (stderr or stdout).strip().splitlines()
            raise ProjectConnectionError(
                self.project_dir,
                reason[-1] if reason else f"launcher exited with code {proc.returncode}",
            )

        return parse_version_output(stdout)

    def run_build(self, tasks: Sequence[str], arguments: Sequence[str] = ()) -> BuildOutcome:
        """Run Gradle tasks; a failing build is a result, not an exception."""
        proc = self._spawn([*tasks, *arguments])
        stdout, stderr, timed_out = self._communicate(proc)
        if timed_out:
            return BuildOutcome(
                success=False,
                stdout=stdout,
                stderr=stderr,
                error=f"build timed out after {self.config.timeout_seconds}s",
            )

        if proc.returncode != 0:
            return BuildOutcome(
                success=False,
                stdout=stdout,
                stderr=stderr,
                error=f"Gradle exited with code {proc.returncode}",
            )
        return BuildOutcome(success=True, stdout=stdout, stderr=stderr)

    # ── Lifecycle ──────────────────────────────────────────────

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for proc in self._processes:
            if proc.poll() is None:
                logger.debug(f"Killing leftover Gradle process {proc.pid}")
                kill_process_tree(proc)
                proc.wait()
        self._processes.clear()
        logger.debug(f"Closed Gradle session for {self.project_dir}")


def kill_process_tree(proc: subprocess.Popen) -> None:
    """Kill ``proc`` and every process in its session's group."""
    if os.name == "nt":
        proc.kill()
        return
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        logger.debug(f"Process group {proc.pid} already exited")


SessionFactory = Callable[[Path, AnalysisConfig], ContextManager[GradleSession]]


def open_session(project_dir: Path, config: AnalysisConfig) -> GradleSession:
    """Default session factory."""
    return GradleSession(project_dir, config)


def parse_version_output(output: str) -> BuildEnvironment:
    m = _GRADLE_LINE_RE.search(output)
    if m is None:
        first = output.strip().splitlines()
        raise VersionParseError(first[0] if first else "", "no 'Gradle X.Y' line in launcher output")
    jvm = _JVM_LINE_RE.search(output)
    return BuildEnvironment(
        gradle_version=m.group(1),
        java_version=jvm.group(1) if jvm else None,
        java_home=os.environ.get("JAVA_HOME"),
    )


# ── Connection result ──────────────────────────────────────────


class ConnectStatus(Enum):
    CONNECTED = "connected"
    CONNECTION_ERROR = "connection_error"
    VERSION_PARSE_ERROR = "version_parse_error"


@dataclass(frozen=True)
class ConnectResult:
    status: ConnectStatus
    environment: Optional[BuildEnvironment] = None
    version: Optional[GradleVersion] = None
    error: Optional[GradleInsightError] = None

    @property
    def ok(self) -> bool:
        return self.status is ConnectStatus.CONNECTED


def connect(
    project_dir: Path,
    config: AnalysisConfig,
    session_factory: SessionFactory = open_session,
) -> ConnectResult:
    """Query the build environment, reporting failures as a ConnectResult."""
    try:
        with session_factory(project_dir, config) as session:
            environment = session.build_environment()
    except ProjectConnectionError as e:
        return ConnectResult(ConnectStatus.CONNECTION_ERROR, error=e)
    except VersionParseError as e:
        return ConnectResult(ConnectStatus.VERSION_PARSE_ERROR, error=e)

    try:
        version = parse_version(environment.gradle_version)
    except VersionParseError as e:
        return ConnectResult(ConnectStatus.VERSION_PARSE_ERROR, environment=environment, error=e)

    return ConnectResult(ConnectStatus.CONNECTED, environment=environment, version=version)


@dataclass(frozen=True)
class DetectedVersion:
    text: str
    version: GradleVersion
    source: str  # "launcher" | "wrapper" | "none"


def detect_version_from_wrapper(project_dir: Path, warnings: list[str]) -> DetectedVersion:
    """Degraded detection from gradle/wrapper/gradle-wrapper.properties."""
    props = project_dir / WRAPPER_PROPERTIES
    if not props.is_file():
        _warn(warnings, f"No {WRAPPER_PROPERTIES.as_posix()} found; Gradle version is unknown")
        return DetectedVersion(UNKNOWN_VERSION, UNKNOWN, "none")

    try:
        content = props.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        _warn(warnings, f"Failed to read wrapper properties: {e}; Gradle version is unknown")
        return DetectedVersion(UNKNOWN_VERSION, UNKNOWN, "none")

    m = _WRAPPER_VERSION_RE.search(content)
    if m is None:
        _warn(warnings, "Could not parse Gradle version from wrapper properties; version is unknown")
        return DetectedVersion(UNKNOWN_VERSION, UNKNOWN, "none")

    text = m.group(1)
    return DetectedVersion(text, parse_version(text), "wrapper")


def resolve_gradle_version(
    project_dir: Path,
    config: AnalysisConfig,
    warnings: list[str],
    session_factory: SessionFactory = open_session,
) -> DetectedVersion:
    """Connect once and degrade to a conservative default on failure.

    Every degradation appends a warning to ``warnings`` and logs it.
    """
    result = connect(project_dir, config, session_factory)

    if result.status is ConnectStatus.CONNECTED:
        assert result.environment is not None and result.version is not None
        logger.debug(f"Gradle version from launcher: {result.environment.gradle_version}")
        return DetectedVersion(result.environment.gradle_version, result.version, "launcher")

    if result.status is ConnectStatus.CONNECTION_ERROR:
        _warn(warnings, f"Could not connect to Gradle: {result.error}")
        _warn(warnings, "Falling back to wrapper properties detection (less reliable)")
        return detect_version_from_wrapper(project_dir, warnings)

    _warn(
        warnings,
        f"{result.error}; treating the Gradle version as unknown (older than any target)",
    )
    raw = result.environment.gradle_version if result.environment else UNKNOWN_VERSION
    return DetectedVersion(raw, UNKNOWN, "launcher")


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)
