"""Pattern Registry: declarative build-script anti-pattern definitions.

Each PatternDefinition carries its matcher, metadata for reporting, and the
OpenRewrite transformation it maps to. The detector and the recipe generator
only ever iterate this table, so adding a pattern never touches their code.

Patterns whose transformation is ``Manual`` have no safe automated fix; they
surface as review annotations in generated recipes and as an assisted step in
the migration plan.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from ..models import MANUAL

ConfigFn = Callable[[re.Match], dict]


@dataclass(frozen=True)
class PatternDefinition:
    """A single detectable pattern.

    Attributes:
        name:           Unique pattern identifier (e.g. "eager-task-create").
        category:       Statistics bucket; several patterns may share one.
        matcher:        Compiled regular expression applied to full file content.
        severity:       Base severity in [0, 1].
        description:    Human-readable explanation of what this detects.
        suggested_fix:  Remediation text.
        transformation: Transformation type tag, or ``Manual``.
        config_fn:      Builds the transformation options from a match.
    """

    name: str
    category: str
    matcher: re.Pattern
    severity: float
    description: str
    suggested_fix: str
    transformation: str
    config_fn: ConfigFn

    @property
    def is_manual(self) -> bool:
        return self.transformation == MANUAL

    def generate_config(self, match: "re.Match[str]") -> dict[str, str]:
        return dict(self.config_fn(match))


# ==============================================================================
# Config generators
# ==============================================================================


_LEGACY_CONFIGURATIONS = {
    "compile": "implementation",
    "testCompile": "testImplementation",
    "runtime": "runtimeOnly",
    "testRuntime": "testRuntimeOnly",
}


def _task_lookup_config(m: "re.Match[str]") -> dict[str, str]:
    name = m.group(1)
    if name is None:
        return {"oldMethod": "tasks.getByName", "newMethod": "tasks.named"}
    return {
        "oldMethod": f'tasks.getByName("{name}")',
        "newMethod": f'tasks.named("{name}")',
    }


def _get_build_dir_config(m: "re.Match[str]") -> dict[str, str]:
    receiver = m.group(1)
    return {
        "find": m.group(0),
        "replace": f"{receiver}.getLayout().getBuildDirectory().get().getAsFile()",
    }


def _build_dir_config(m: "re.Match[str]") -> dict[str, str]:
    text = m.group(0)
    if text.startswith("$"):
        return {"find": text, "replace": "${layout.buildDirectory.get().asFile}"}
    return {"find": text, "replace": "layout.buildDirectory.get().asFile"}


def _provider_config(provider: str, method: str) -> ConfigFn:
    def config(m: "re.Match[str]") -> dict[str, str]:
        key = m.group(1)
        if key is None:
            return {
                "methodPattern": f"java.lang.System {method}(java.lang.String)",
                "replacement": f"providers.{provider}",
            }
        return {
            "pattern": f'System.{method}("{key}")',
            "replacement": f'providers.{provider}("{key}").getOrNull()',
        }

    return config


def _configuration_config(m: "re.Match[str]") -> dict[str, str]:
    old, tail = m.group(1), m.group(2)
    return {"find": m.group(0), "replace": _LEGACY_CONFIGURATIONS[old] + tail}


# ==============================================================================
# Registry
# ==============================================================================


PATTERNS: tuple[PatternDefinition, ...] = (
    PatternDefinition(
        name="eager-task-create",
        category="eager_task_create",
        matcher=re.compile(r"\btasks\.create\("),
        severity=0.5,
        description="Eager task creation with tasks.create()",
        suggested_fix="Use tasks.register() for lazy configuration",
        transformation="ReplaceText",
        config_fn=lambda m: {"find": "tasks.create(", "replace": "tasks.register("},
    ),
    PatternDefinition(
        name="eager-task-getByName",
        category="eager_task_getByName",
        matcher=re.compile(r"""\btasks\.getByName\((?:\s*["']([^"']+)["']\s*\))?"""),
        severity=0.5,
        description="Eager task lookup with getByName",
        suggested_fix="Use tasks.named() for lazy configuration",
        transformation="ReplaceMethodCall",
        config_fn=_task_lookup_config,
    ),
    PatternDefinition(
        name="get-build-dir-call",
        category="deprecated_buildDir",
        matcher=re.compile(r"(\w+)\.getBuildDir\(\)"),
        severity=0.7,
        description="Direct getBuildDir() call",
        suggested_fix="Use layout.buildDirectory instead",
        transformation="ReplaceText",
        config_fn=_get_build_dir_config,
    ),
    PatternDefinition(
        name="build-dir-property",
        category="deprecated_buildDir",
        matcher=re.compile(r"\$buildDir\b|(?:\bproject\.)?\bbuildDir\b"),
        severity=0.7,
        description="Direct buildDir property access",
        suggested_fix="Use layout.buildDirectory",
        transformation="ReplaceText",
        config_fn=_build_dir_config,
    ),
    PatternDefinition(
        name="system-property-config",
        category="system_getProperty",
        matcher=re.compile(r"""\bSystem\.getProperty\((?:\s*["']([^"']+)["']\s*\))?"""),
        severity=0.6,
        description="System.getProperty in configuration phase",
        suggested_fix="Use providers.systemProperty()",
        transformation="ChangeMethodInvocation",
        config_fn=_provider_config("systemProperty", "getProperty"),
    ),
    PatternDefinition(
        name="system-env-config",
        category="system_getenv",
        matcher=re.compile(r"""\bSystem\.getenv\((?:\s*["']([^"']+)["']\s*\))?"""),
        severity=0.6,
        description="System.getenv in configuration phase",
        suggested_fix="Use providers.environmentVariable()",
        transformation="ChangeMethodInvocation",
        config_fn=_provider_config("environmentVariable", "getenv"),
    ),
    PatternDefinition(
        name="legacy-apply-plugin",
        category="legacy_apply_plugin",
        matcher=re.compile(r"\bapply\s+plugin\s*:|\bapply\s*\(\s*plugin\s*="),
        severity=0.4,
        description="Legacy plugin application",
        suggested_fix="Declare the plugin in the plugins {} block",
        transformation="ActivateRecipe",
        config_fn=lambda m: {"recipe": "org.openrewrite.gradle.plugins.MigrateToPluginsBlock"},
    ),
    PatternDefinition(
        name="deprecated-configuration",
        category="deprecated_configurations",
        matcher=re.compile(
            r"""(?<![\w.])(compile|testCompile|runtime|testRuntime)(\s*\(?\s*["'])"""
        ),
        severity=0.9,
        description="Removed dependency configuration",
        suggested_fix="Use implementation / runtimeOnly configurations",
        transformation="ReplaceText",
        config_fn=_configuration_config,
    ),
    PatternDefinition(
        name="internal-api",
        category="internal_api_usage",
        matcher=re.compile(r"\borg\.gradle\.(?:\w+\.)*?internal\.(\w+)"),
        severity=0.8,
        description="Internal Gradle API usage",
        suggested_fix="Use public API equivalent",
        transformation=MANUAL,
        config_fn=lambda m: {
            "internalClass": m.group(1),
            "note": "Replace with public API - no automated fix available",
        },
    ),
    PatternDefinition(
        name="convention-access",
        category="deprecated_convention",
        matcher=re.compile(r"(?:\bproject\.)?\bconvention\.(getPlugin|findPlugin|plugins)\b"),
        severity=0.8,
        description="Deprecated Convention API",
        suggested_fix="Use extensions instead",
        transformation=MANUAL,
        config_fn=lambda m: {
            "accessor": m.group(1),
            "note": "Replace convention with extensions API",
        },
    ),
    PatternDefinition(
        name="project-file-operation",
        category="project_file_operation",
        matcher=re.compile(r"\bproject\.(copy|delete|sync|exec|javaexec)\s*\{"),
        severity=0.7,
        description="Project file operation in task action",
        suggested_fix="Inject FileSystemOperations or ExecOperations service",
        transformation=MANUAL,
        config_fn=lambda m: {
            "operation": m.group(1),
            "note": "Requires manual migration to injected services",
        },
    ),
)


def categories(patterns: tuple[PatternDefinition, ...] = PATTERNS) -> list[str]:
    """Distinct categories in registry order."""
    return list(dict.fromkeys(p.category for p in patterns))


def manual_categories(patterns: tuple[PatternDefinition, ...] = PATTERNS) -> set[str]:
    """Categories none of whose patterns has an automated fix."""
    automated = {p.category for p in patterns if not p.is_manual}
    return {p.category for p in patterns if p.is_manual and p.category not in automated}
