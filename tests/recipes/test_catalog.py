"""Tests for recipes/catalog.py."""

from gradle_insight.recipes import KNOWN_RECIPES, list_recipes, migrate_recipe, recipe_class


class TestListRecipes:
    """Test list_recipes function."""

    def test_no_filter_lists_everything(self):
        assert list_recipes() == list(KNOWN_RECIPES)
        assert list_recipes("") == list(KNOWN_RECIPES)

    def test_filter_is_case_insensitive(self):
        names = [r.name for r in list_recipes("KOTLIN")]
        assert names == ["org.openrewrite.kotlin.gradle.MigrateToKotlinDsl"]

    def test_filter_matches_description(self):
        names = [r.name for r in list_recipes("version catalog")]
        assert names == ["org.openrewrite.gradle.MigrateToVersionCatalog"]

    def test_no_match(self):
        assert list_recipes("maven-only") == []


class TestRecipeNames:
    def test_migrate_recipe(self):
        assert migrate_recipe(9) == "org.openrewrite.gradle.MigrateToGradle9"

    def test_recipe_class(self):
        assert recipe_class("ReplaceText") == "org.openrewrite.text.FindAndReplace"
        assert recipe_class("ChangeMethodInvocation") == (
            "org.openrewrite.java.ChangeMethodInvocation"
        )
        assert recipe_class("SomethingNew") == "org.openrewrite.java.SomethingNew"
