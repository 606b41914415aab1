"""Known OpenRewrite recipes for Gradle builds."""

from __future__ import annotations

from typing import Optional

from ..models import RecipeInfo

WRAPPER_RECIPE = "org.openrewrite.gradle.UpdateGradleWrapper"
KOTLIN_DSL_RECIPE = "org.openrewrite.kotlin.gradle.MigrateToKotlinDsl"
PLUGINS_BLOCK_RECIPE = "org.openrewrite.gradle.plugins.MigrateToPluginsBlock"
VERSION_CATALOG_RECIPE = "org.openrewrite.gradle.MigrateToVersionCatalog"


def migrate_recipe(major: int) -> str:
    """Recipe migrating deprecated APIs to Gradle ``major``."""
    return f"org.openrewrite.gradle.MigrateToGradle{major}"


KNOWN_RECIPES: tuple[RecipeInfo, ...] = (
    # Migration
    RecipeInfo(migrate_recipe(9), "Migrate deprecated APIs from Gradle 8 to Gradle 9"),
    RecipeInfo(migrate_recipe(8), "Migrate deprecated APIs from Gradle 7 to Gradle 8"),
    RecipeInfo(migrate_recipe(7), "Migrate deprecated APIs from Gradle 6 to Gradle 7"),
    RecipeInfo(
        WRAPPER_RECIPE, "Update Gradle wrapper to a specific version", ("version", "distribution")
    ),
    # DSL
    RecipeInfo(KOTLIN_DSL_RECIPE, "Migrate Groovy DSL to Kotlin DSL"),
    RecipeInfo(PLUGINS_BLOCK_RECIPE, "Migrate apply plugin to plugins block"),
    # Dependencies
    RecipeInfo(VERSION_CATALOG_RECIPE, "Migrate dependencies to version catalog", ("catalogName",)),
    RecipeInfo(
        "org.openrewrite.gradle.ChangeDependencyVersion",
        "Change a dependency version",
        ("groupId", "artifactId", "newVersion"),
    ),
    RecipeInfo(
        "org.openrewrite.gradle.UpgradeDependencyVersion",
        "Upgrade a dependency to a newer version",
        ("groupId", "artifactId", "newVersion"),
    ),
    RecipeInfo(
        "org.openrewrite.gradle.RemoveDependency",
        "Remove a dependency",
        ("groupId", "artifactId"),
    ),
    # Plugins
    RecipeInfo(
        "org.openrewrite.gradle.plugins.ChangePlugin",
        "Change a plugin ID",
        ("pluginIdOld", "pluginIdNew", "newVersion"),
    ),
    RecipeInfo(
        "org.openrewrite.gradle.plugins.UpgradePluginVersion",
        "Upgrade a plugin version",
        ("pluginId", "newVersion"),
    ),
)


def list_recipes(filter_text: Optional[str] = None) -> list[RecipeInfo]:
    """Catalog entries whose name or description contains ``filter_text``."""
    if not filter_text:
        return list(KNOWN_RECIPES)
    needle = filter_text.lower()
    return [
        r for r in KNOWN_RECIPES if needle in r.name.lower() or needle in r.description.lower()
    ]


# Transformation type tag -> OpenRewrite recipe class
_RECIPE_CLASSES = {
    "ChangeMethodName": "org.openrewrite.java.ChangeMethodName",
    "ChangeMethodInvocation": "org.openrewrite.java.ChangeMethodInvocation",
    "ReplaceMethodCall": "org.openrewrite.java.ReplaceMethodInvocation",
    "ReplaceText": "org.openrewrite.text.FindAndReplace",
}


def recipe_class(transformation: str) -> str:
    return _RECIPE_CLASSES.get(transformation, f"org.openrewrite.java.{transformation}")
