"""Tests for patterns/registry.py - pattern definitions and generated configs."""

import pytest

from gradle_insight.patterns.registry import PATTERNS, categories, manual_categories


def find_pattern(name):
    return next(p for p in PATTERNS if p.name == name)


def _config(name, text):
    pattern = find_pattern(name)
    match = pattern.matcher.search(text)
    assert match is not None, f"{name} did not match {text!r}"
    return pattern.generate_config(match)


class TestRegistryShape:
    """Test registry invariants."""

    def test_names_unique(self):
        names = [p.name for p in PATTERNS]
        assert len(names) == len(set(names))

    def test_severity_in_unit_interval(self):
        assert all(0.0 <= p.severity <= 1.0 for p in PATTERNS)

    def test_categories_in_registry_order(self):
        cats = categories()
        assert cats[0] == "eager_task_create"
        assert cats.count("deprecated_buildDir") == 1
        assert cats[-1] == "project_file_operation"

    def test_manual_categories(self):
        assert manual_categories() == {
            "internal_api_usage",
            "deprecated_convention",
            "project_file_operation",
        }


class TestPatternConfigs:
    """Each pattern's config is derived from its match."""

    def test_eager_create(self):
        assert _config("eager-task-create", "tasks.create('hello') {") == {
            "find": "tasks.create(",
            "replace": "tasks.register(",
        }

    def test_get_by_name_with_literal(self):
        assert _config("eager-task-getByName", 'tasks.getByName("jar").enabled = false') == {
            "oldMethod": 'tasks.getByName("jar")',
            "newMethod": 'tasks.named("jar")',
        }

    def test_get_by_name_with_variable(self):
        assert _config("eager-task-getByName", "tasks.getByName(taskName)") == {
            "oldMethod": "tasks.getByName",
            "newMethod": "tasks.named",
        }

    def test_get_build_dir_call(self):
        config = _config("get-build-dir-call", "def out = project.getBuildDir()")
        assert config["find"] == "project.getBuildDir()"
        assert config["replace"] == "project.getLayout().getBuildDirectory().get().getAsFile()"

    def test_build_dir_interpolation(self):
        assert _config("build-dir-property", 'into "$buildDir/libs"') == {
            "find": "$buildDir",
            "replace": "${layout.buildDirectory.get().asFile}",
        }

    def test_build_dir_property(self):
        assert _config("build-dir-property", "println project.buildDir")["find"] == (
            "project.buildDir"
        )

    def test_build_directory_not_matched(self):
        matcher = find_pattern("build-dir-property").matcher
        assert matcher.search("layout.buildDirectory.dir('x')") is None
        assert matcher.search("project.getBuildDir()") is None

    def test_system_property(self):
        assert _config("system-property-config", 'System.getProperty("env")') == {
            "pattern": 'System.getProperty("env")',
            "replacement": 'providers.systemProperty("env").getOrNull()',
        }

    def test_system_env(self):
        config = _config("system-env-config", "def home = System.getenv('HOME')")
        assert config["replacement"] == 'providers.environmentVariable("HOME").getOrNull()'

    @pytest.mark.parametrize("text", ["apply plugin: 'java'", 'apply(plugin = "java")'])
    def test_legacy_apply_plugin(self, text):
        assert _config("legacy-apply-plugin", text) == {
            "recipe": "org.openrewrite.gradle.plugins.MigrateToPluginsBlock"
        }

    def test_deprecated_configuration(self):
        assert _config("deprecated-configuration", "    compile 'a:b:1.0'") == {
            "find": "compile '",
            "replace": "implementation '",
        }
        assert _config("deprecated-configuration", 'testCompile("junit:junit:4.13")') == {
            "find": 'testCompile("',
            "replace": 'testImplementation("',
        }

    @pytest.mark.parametrize(
        "text", ["implementation 'a:b:1'", "compileOnly 'a:b:1'", "options.compile 'x'"]
    )
    def test_modern_configurations_not_matched(self, text):
        assert find_pattern("deprecated-configuration").matcher.search(text) is None

    def test_internal_api_is_manual(self):
        pattern = find_pattern("internal-api")
        assert pattern.is_manual
        config = _config("internal-api", "import org.gradle.internal.os.OperatingSystem")
        assert config["internalClass"] == "os"

    def test_convention_access(self):
        config = _config("convention-access", "project.convention.getPlugin(JavaPluginConvention)")
        assert config["accessor"] == "getPlugin"

    @pytest.mark.parametrize("operation", ["copy", "delete", "sync", "exec", "javaexec"])
    def test_project_file_operation(self, operation):
        assert _config("project-file-operation", f"project.{operation} {{")["operation"] == (
            operation
        )
