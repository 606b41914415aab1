"""Tests for patterns/detector.py - matching, line numbers and counts."""

from gradle_insight.config import AnalysisConfig
from gradle_insight.models import BuildFile, Dialect
from gradle_insight.patterns import (
    PATTERNS,
    IssueDetector,
    count_categories,
    detect_in_content,
    line_number,
)
from gradle_insight.scanning import BuildFileScanner

LEGACY_SCRIPT = """apply plugin: 'java'
apply plugin: 'maven-publish'

dependencies {
    compile 'org.slf4j:slf4j-api:1.7.36'
    testCompile 'junit:junit:4.13.2'
}

tasks.create('dist') {
    doLast {
        project.copy {
            from "$buildDir/libs"
            into System.getenv('DIST_DIR')
        }
    }
}
"""


class TestLineNumber:
    """Test line_number function."""

    def test_first_line(self):
        assert line_number("abc\ndef", 0) == 1

    def test_counts_preceding_newlines(self):
        content = "a\nb\nc"
        assert line_number(content, 2) == 2
        assert line_number(content, 4) == 3

    def test_offset_on_newline_belongs_to_its_line(self):
        assert line_number("a\nb", 1) == 1


class TestDetectInContent:
    """Test detect_in_content function."""

    def test_findings_carry_location_and_metadata(self):
        findings = detect_in_content(LEGACY_SCRIPT, "build.gradle")
        create = next(f for f in findings if f.pattern == "eager-task-create")
        assert create.line == 9
        assert create.file == "build.gradle"
        assert create.matched_text == "tasks.create("
        assert create.location == "build.gradle:9"
        assert create.occurrences == 1

    def test_every_hit_recorded(self):
        findings = detect_in_content("apply plugin: 'a'\napply plugin: 'a'\n", "build.gradle")
        assert [f.line for f in findings] == [1, 2]

    def test_clean_script(self):
        assert detect_in_content('plugins { id("java") }\n', "build.gradle.kts") == []

    def test_custom_pattern_table(self):
        only_plugins = tuple(p for p in PATTERNS if p.category == "legacy_apply_plugin")
        findings = detect_in_content(LEGACY_SCRIPT, "build.gradle", only_plugins)
        assert {f.category for f in findings} == {"legacy_apply_plugin"}
        assert len(findings) == 2


class TestCategoryCounts:
    """Counts equal raw matcher hits, per category."""

    def test_counts(self):
        counts = count_categories(detect_in_content(LEGACY_SCRIPT, "build.gradle"))
        assert counts == {
            "eager_task_create": 1,
            "deprecated_buildDir": 1,
            "system_getenv": 1,
            "legacy_apply_plugin": 2,
            "deprecated_configurations": 2,
            "project_file_operation": 1,
        }
        assert list(counts) == [
            "eager_task_create",
            "deprecated_buildDir",
            "system_getenv",
            "legacy_apply_plugin",
            "deprecated_configurations",
            "project_file_operation",
        ]

    def test_sum_equals_isolated_rescan(self, make_project):
        files = {
            "build.gradle": LEGACY_SCRIPT,
            "app/build.gradle": LEGACY_SCRIPT.replace("dist", "pack"),
            "lib/build.gradle.kts": 'val dir = project.buildDir\nSystem.getProperty("x")\n',
            "settings.gradle": "include ':app', ':lib'\n",
        }
        root = make_project(files)

        result = IssueDetector(root).detect(BuildFileScanner(root).scan())

        isolated = sum(
            len(list(pattern.matcher.finditer(content)))
            for content in files.values()
            for pattern in PATTERNS
        )
        assert sum(result.category_counts().values()) == isolated
        assert len(result.findings) == isolated


class TestIssueDetector:
    """Test IssueDetector.detect."""

    def _many_files(self, make_project, n=12):
        return make_project(
            {f"m{i:02d}/build.gradle": LEGACY_SCRIPT * (i % 3 + 1) for i in range(n)}
        )

    def test_parallel_matches_sequential(self, make_project):
        root = self._many_files(make_project)
        files = BuildFileScanner(root).scan()

        sequential = IssueDetector(root, AnalysisConfig(workers=1)).detect(files)
        parallel = IssueDetector(root, AnalysisConfig(workers=4)).detect(files)

        assert parallel.findings == sequential.findings
        assert parallel.total_lines == sequential.total_lines

    def test_findings_ordered_by_path(self, make_project):
        root = self._many_files(make_project)
        files = list(reversed(BuildFileScanner(root).scan()))

        result = IssueDetector(root, AnalysisConfig(workers=4)).detect(files)

        paths = [f.file for f in result.findings]
        assert paths == sorted(paths)

    def test_total_lines(self, make_project):
        root = make_project({"build.gradle": "a\nb\nc\n", "settings.gradle": "x\n"})
        result = IssueDetector(root).detect(BuildFileScanner(root).scan())
        assert result.total_lines == 4
        assert result.files_scanned == 2

    def test_unreadable_file_skipped(self, make_project):
        root = make_project({"build.gradle": "apply plugin: 'java'\n"})
        files = [
            BuildFile("build.gradle", Dialect.GROOVY),
            BuildFile("gone/build.gradle", Dialect.GROOVY),
        ]
        result = IssueDetector(root).detect(files)
        assert result.files_errored == 1
        assert result.files_scanned == 1
        assert len(result.findings) == 1
