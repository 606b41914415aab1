"""OpenRewrite execution through a generated Gradle init script.

The runner connects to the build, writes a temporary init script that puts
the OpenRewrite plugin on the build classpath and activates the requested
recipes, then runs ``rewriteDryRun`` or ``rewriteRun``. The init script uses
the Kotlin DSL on Gradle 8 and later, Groovy otherwise.

In dry-run mode a ProjectFileGuard snapshots every project file
first and puts back the exact bytes afterwards, whether the build
succeeded, failed or raised.
"""

from __future__ import annotations

import os
import re
import stat
import tempfile
import time
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional, Sequence

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..connector.session import SessionFactory, detect_version_from_wrapper, open_session
from ..connector.versions import GradleVersion, parse_version_lenient
from ..exceptions import ExecutionError, ProjectConnectionError, VersionParseError
from ..logging_config import get_logger
from ..models import RunResult
from ..scanning.scanner import is_excluded

logger = get_logger(__name__)

KOTLIN_INIT_SCRIPT_MIN = GradleVersion(8, 0, 0)

_FILES_CHANGED_RE = re.compile(r"(\d+) files? (?:changed|would be changed)")
_CHANGED_FILE_RE = re.compile(r"(?:Changed|Would change): (\S+\.(?:gradle\.kts|gradle|java|kt))\b")
_HEADER = "// Generated by gradle-insight recipe runner"


# ── Init scripts ───────────────────────────────────────────────


def render_kotlin_init_script(
    recipes: Sequence[str],
    plugin: str,
    additional_deps: Sequence[str] = (),
    fail_on_dry_run: bool = False,
) -> str:
    lines = [
        _HEADER,
        "initscript {",
        "    repositories {",
        "        mavenCentral()",
        "        gradlePluginPortal()",
        "    }",
        "    dependencies {",
        f'        classpath("{plugin}")',
    ]
    lines.extend(f'        classpath("{dep}")' for dep in additional_deps)
    lines += [
        "    }",
        "}",
        "",
        "allprojects {",
        "    apply(plugin = org.openrewrite.gradle.RewritePlugin::class.java)",
        "",
        "    configure<org.openrewrite.gradle.RewriteExtension> {",
    ]
    lines.extend(f'        activeRecipe("{recipe}")' for recipe in recipes)
    if fail_on_dry_run:
        lines.append("        setFailOnDryRunResults(true)")
    lines += ["    }", "}"]
    return "\n".join(lines) + "\n"


def render_groovy_init_script(
    recipes: Sequence[str],
    plugin: str,
    additional_deps: Sequence[str] = (),
    fail_on_dry_run: bool = False,
) -> str:
    lines = [
        _HEADER,
        "initscript {",
        "    repositories {",
        "        mavenCentral()",
        "        gradlePluginPortal()",
        "    }",
        "    dependencies {",
        f"        classpath '{plugin}'",
    ]
    lines.extend(f"        classpath '{dep}'" for dep in additional_deps)
    lines += [
        "    }",
        "}",
        "",
        "allprojects {",
        "    apply plugin: org.openrewrite.gradle.RewritePlugin",
        "",
        "    rewrite {",
    ]
    lines.extend(f"        activeRecipe '{recipe}'" for recipe in recipes)
    if fail_on_dry_run:
        lines.append("        failOnDryRunResults = true")
    lines += ["    }", "}"]
    return "\n".join(lines) + "\n"


def uses_kotlin_init_script(version: GradleVersion) -> bool:
    return version >= KOTLIN_INIT_SCRIPT_MIN


# ── Dry-run guard ──────────────────────────────────────────────


class ProjectFileGuard:
    """Snapshot project files and restore them byte-for-byte on exit.

    Every regular file outside the excluded directories is captured, wrapper
    scripts and binaries included. Modified and deleted files get their
    original bytes and permission bits back; files that did not exist when the
    snapshot was taken are removed. Symlinks are left alone.
    """

    def __init__(self, root_dir: Path, exclude_dirs: Sequence[str]):
        self.root_dir = Path(root_dir)
        self.exclude_dirs = frozenset(exclude_dirs)
        self._snapshot: dict[str, tuple[bytes, int]] = {}
        self.restored: list[str] = []

    def __enter__(self) -> "ProjectFileGuard":
        self._snapshot = {rel: self._capture(rel) for rel in self._files()}
        logger.debug(f"Dry-run guard captured {len(self._snapshot)} files")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def _files(self) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(self.root_dir):
            dirnames[:] = sorted(d for d in dirnames if d not in self.exclude_dirs)
            for name in sorted(filenames):
                full = Path(dirpath) / name
                if full.is_symlink() or not full.is_file():
                    continue
                relative = PurePosixPath(full.relative_to(self.root_dir).as_posix())
                if not is_excluded(relative, self.exclude_dirs):
                    yield relative.as_posix()

    def _capture(self, rel: str) -> tuple[bytes, int]:
        path = self.root_dir / rel
        return path.read_bytes(), stat.S_IMODE(path.stat().st_mode)

    def restore(self) -> list[str]:
        restored: list[str] = []
        current = set(self._files())

        for rel, (content, mode) in self._snapshot.items():
            path = self.root_dir / rel
            if rel in current and self._capture(rel) == (content, mode):
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            path.chmod(mode)
            restored.append(rel)

        for rel in sorted(current - self._snapshot.keys()):
            (self.root_dir / rel).unlink()
            restored.append(rel)

        if restored:
            logger.warning(f"Dry run touched {len(restored)} project files; restored them")
        self.restored = restored
        return restored


# ── Runner ─────────────────────────────────────────────────────


def parse_run_output(output: str, result: RunResult) -> None:
    m = _FILES_CHANGED_RE.search(output)
    if m:
        result.changes_detected = int(m.group(1))
    result.changed_files.extend(m.group(1) for m in _CHANGED_FILE_RE.finditer(output))
    if "Running recipe" in output:
        result.recipes_executed = True


class RecipeRunner:
    """Run OpenRewrite recipes against a Gradle project."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        session_factory: SessionFactory = open_session,
    ):
        self.config = config or DEFAULT_CONFIG
        self.session_factory = session_factory

    def run(self, project_dir: Path, recipes: Sequence[str], dry_run: bool = False) -> RunResult:
        project_dir = Path(project_dir)
        result = RunResult(
            project_path=str(project_dir.resolve()),
            gradle_version="unknown",
            recipes=list(recipes),
            dry_run=dry_run,
        )

        try:
            with self.session_factory(project_dir, self.config) as session:
                result.gradle_version = self._detect_version(session, project_dir, result.warnings)
                version = parse_version_lenient(result.gradle_version, result.warnings)
                script = self._write_init_script(version, recipes)
                try:
                    self._execute(session, project_dir, script, result)
                finally:
                    self._cleanup(script, result)
        except ProjectConnectionError as e:
            logger.error(str(e))
            result.success = False
            result.error = str(e)

        return result

    def _detect_version(self, session, project_dir: Path, warnings: list[str]) -> str:
        try:
            return session.build_environment().gradle_version
        except (ProjectConnectionError, VersionParseError) as e:
            message = f"Could not query Gradle version: {e}; falling back to wrapper properties"
            logger.warning(message)
            warnings.append(message)
            return detect_version_from_wrapper(project_dir, warnings).text

    def _write_init_script(self, version: GradleVersion, recipes: Sequence[str]) -> Path:
        kotlin = uses_kotlin_init_script(version)
        render = render_kotlin_init_script if kotlin else render_groovy_init_script
        content = render(
            recipes,
            self.config.rewrite_plugin,
            self.config.additional_deps,
            self.config.fail_on_dry_run,
        )
        try:
            fd, name = tempfile.mkstemp(
                prefix="openrewrite-init-", suffix=".gradle.kts" if kotlin else ".gradle"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise ExecutionError(f"cannot write init script: {e}")
        logger.debug(f"Generated init script: {name}")
        return Path(name)

    def _execute(self, session, project_dir: Path, script: Path, result: RunResult) -> None:
        task = "rewriteDryRun" if result.dry_run else "rewriteRun"
        arguments = ["--init-script", str(script), "--no-configuration-cache"]
        if self.config.verbose:
            arguments.append("--info")

        logger.info(f"Running: gradle {task} {' '.join(arguments)}")
        start = time.monotonic()

        if result.dry_run:
            with ProjectFileGuard(project_dir, self.config.exclude_dirs) as guard:
                outcome = session.run_build([task], arguments)
            result.restored_files = guard.restored
        else:
            outcome = session.run_build([task], arguments)

        result.duration_ms = int((time.monotonic() - start) * 1000)
        result.success = outcome.success
        result.error = outcome.error
        result.stdout = outcome.stdout
        result.stderr = outcome.stderr
        parse_run_output(outcome.stdout, result)

    def _cleanup(self, script: Path, result: RunResult) -> None:
        try:
            script.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            message = f"Failed to delete temporary init script {script}: {e}"
            logger.warning(message)
            result.warnings.append(message)
