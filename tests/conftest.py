"""Shared test fixtures for Gradle Insight.

No test needs a real Gradle install: the connector and the recipe runner
accept a session factory, and FakeSession stands in for the launcher.
"""

import os
from pathlib import Path
from typing import Callable, Optional

import pytest

from gradle_insight.config import AnalysisConfig
from gradle_insight.exceptions import GradleInsightError
from gradle_insight.models import BuildEnvironment, BuildOutcome


class FakeSession:
    """Scripted GradleSession replacement.

    ``on_build`` runs inside run_build with the project directory, so tests
    can simulate a build that rewrites, creates or deletes files.
    """

    def __init__(
        self,
        version: Optional[str] = "8.5",
        error: Optional[GradleInsightError] = None,
        outcome: Optional[BuildOutcome] = None,
        on_build: Optional[Callable[[Path], None]] = None,
    ):
        self.version = version
        self.error = error
        self.outcome = outcome or BuildOutcome(success=True)
        self.on_build = on_build
        self.project_dir: Optional[Path] = None
        self.builds: list[tuple[list[str], list[str]]] = []
        self.closed = False
        self.opened = 0

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    def build_environment(self) -> BuildEnvironment:
        if self.error is not None:
            raise self.error
        return BuildEnvironment(gradle_version=self.version, java_version="17.0.9")

    def run_build(self, tasks, arguments=()) -> BuildOutcome:
        self.builds.append((list(tasks), list(arguments)))
        if self.on_build is not None:
            self.on_build(self.project_dir)
        return self.outcome

    def factory(self, project_dir: Path, config: AnalysisConfig) -> "FakeSession":
        self.project_dir = Path(project_dir)
        self.opened += 1
        self.closed = False
        return self


def write_files(root: Path, files: dict) -> Path:
    """Create ``files`` (relative path -> text) under ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Keep user config files and GRADLE_INSIGHT_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("GRADLE_INSIGHT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def config():
    return AnalysisConfig()


@pytest.fixture
def groovy_project(tmp_path):
    """Two-module Groovy build on Gradle 7.6 with assorted legacy patterns."""
    return write_files(
        tmp_path,
        {
            "settings.gradle": "rootProject.name = 'demo'\ninclude ':app', ':lib'\n",
            "build.gradle": (
                "apply plugin: 'java'\n"
                "\n"
                "tasks.create('hello') {\n"
                "    doLast { println \"$buildDir\" }\n"
                "}\n"
            ),
            "app/build.gradle": (
                "apply plugin: 'application'\n"
                "dependencies {\n"
                "    compile 'com.google.guava:guava:31.1-jre'\n"
                "}\n"
                "def conv = project.convention.getPlugin(JavaPluginConvention)\n"
            ),
            "lib/build.gradle": "apply plugin: 'java-library'\n",
            "gradle/wrapper/gradle-wrapper.properties": (
                "distributionUrl=https\\://services.gradle.org/distributions/gradle-7.6-bin.zip\n"
            ),
        },
    )


@pytest.fixture
def kotlin_project(tmp_path):
    """Clean single-module Kotlin DSL build."""
    return write_files(
        tmp_path,
        {
            "settings.gradle.kts": 'rootProject.name = "clean"\n',
            "build.gradle.kts": (
                "plugins {\n"
                "    java\n"
                "}\n"
                "\n"
                'tasks.register("hello") {\n'
                '    doLast { println("hi") }\n'
                "}\n"
            ),
        },
    )


@pytest.fixture
def fake_gradle():
    """Build a FakeSession; pass its ``factory`` where a session factory goes."""
    return FakeSession


@pytest.fixture
def make_project(tmp_path):
    """Write a file mapping under tmp_path and return the project root."""
    return lambda files: write_files(tmp_path, files)
