"""Recipe catalog, declarative recipe generation and OpenRewrite execution."""

from .catalog import KNOWN_RECIPES, list_recipes, migrate_recipe, recipe_class
from .generator import RECIPE_FILE_NAME, RecipeGenerator, group_findings, write_recipe
from .runner import ProjectFileGuard, RecipeRunner, parse_run_output

__all__ = [
    "KNOWN_RECIPES",
    "list_recipes",
    "migrate_recipe",
    "recipe_class",
    "RECIPE_FILE_NAME",
    "RecipeGenerator",
    "group_findings",
    "write_recipe",
    "ProjectFileGuard",
    "RecipeRunner",
    "parse_run_output",
]
