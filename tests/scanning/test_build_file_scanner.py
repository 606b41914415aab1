"""Tests for scanning/scanner.py - build file discovery and exclusion."""

from pathlib import PurePosixPath

import pytest

from gradle_insight.config import AnalysisConfig
from gradle_insight.models import Dialect
from gradle_insight.scanning import BuildFileScanner, classify, is_excluded


class TestClassify:
    """Test classify function."""

    @pytest.mark.parametrize(
        "name,dialect,settings",
        [
            ("build.gradle", Dialect.GROOVY, False),
            ("build.gradle.kts", Dialect.KOTLIN, False),
            ("settings.gradle", Dialect.GROOVY, True),
            ("settings.gradle.kts", Dialect.KOTLIN, True),
        ],
    )
    def test_recognized_names(self, name, dialect, settings):
        build_file = classify(PurePosixPath("module") / name)
        assert build_file.dialect is dialect
        assert build_file.is_settings is settings

    @pytest.mark.parametrize(
        "name",
        ["mybuild.gradle", "build.gradle.bak", "build.gradle.kts.orig", "java-conventions.gradle.kts"],
    )
    def test_near_misses_rejected(self, name):
        assert classify(PurePosixPath(name)) is None


class TestIsExcluded:
    """Exclusion looks at directory segments only."""

    EXCLUDE = ("build", ".gradle", ".toolcache")

    def test_root_build_file_kept(self):
        assert not is_excluded(PurePosixPath("build.gradle"), self.EXCLUDE)

    def test_build_directory_excluded(self):
        assert is_excluded(PurePosixPath("build/generated/build.gradle"), self.EXCLUDE)

    def test_nested_cache_excluded(self):
        assert is_excluded(PurePosixPath("app/.gradle/8.5/build.gradle"), self.EXCLUDE)

    def test_similar_directory_names_kept(self):
        assert not is_excluded(PurePosixPath("buildSrc/build.gradle.kts"), self.EXCLUDE)
        assert not is_excluded(PurePosixPath("build-logic/build.gradle.kts"), self.EXCLUDE)


class TestBuildFileScanner:
    """Test BuildFileScanner.scan on real directory trees."""

    def test_filtering_regression(self, make_project):
        root = make_project(
            {
                "build.gradle": "",
                ".toolcache/8.0/build.gradle": "",
                "build/generated/build.gradle": "",
            }
        )
        paths = [f.path for f in BuildFileScanner(root).scan()]
        assert paths == ["build.gradle"]

    def test_sorted_with_posix_paths(self, make_project):
        root = make_project(
            {
                "settings.gradle.kts": "",
                "lib/build.gradle.kts": "",
                "app/build.gradle.kts": "",
                "build.gradle.kts": "",
                "app/src/main/kotlin/Main.kt": "",
            }
        )
        paths = [f.path for f in BuildFileScanner(root).scan()]
        assert paths == [
            "app/build.gradle.kts",
            "build.gradle.kts",
            "lib/build.gradle.kts",
            "settings.gradle.kts",
        ]

    def test_default_tool_directories_pruned(self, make_project):
        root = make_project(
            {
                "build.gradle": "",
                ".gradle/caches/build.gradle": "",
                ".kotlin/sessions/build.gradle.kts": "",
                ".git/hooks/build.gradle": "",
                ".idea/build.gradle": "",
            }
        )
        assert [f.path for f in BuildFileScanner(root).scan()] == ["build.gradle"]

    def test_custom_exclusions(self, make_project):
        root = make_project({"build.gradle": "", "samples/build.gradle": ""})
        config = AnalysisConfig(exclude_dirs=("samples",))
        assert [f.path for f in BuildFileScanner(root, config).scan()] == ["build.gradle"]

    def test_empty_project(self, tmp_path):
        assert BuildFileScanner(tmp_path).scan() == []
