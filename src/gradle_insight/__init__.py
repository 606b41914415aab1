"""
Gradle Insight - Gradle build analysis and OpenRewrite recipe generation

Scans a Gradle build for deprecated and fragile patterns, classifies the
project's complexity, recommends a remediation strategy with an ordered
migration plan, and turns the findings into a declarative OpenRewrite recipe.
"""

__version__ = "0.1.0"

from .commands import Analyze, Command, GenerateRecipe, ListRecipes, Run, Suggest
from .config import AnalysisConfig, load_config
from .engine import CommandOutcome, analyze, execute

__all__ = [
    "execute",  # Main entry point
    "analyze",
    "CommandOutcome",
    "Command",
    "Analyze",
    "GenerateRecipe",
    "ListRecipes",
    "Run",
    "Suggest",
    "AnalysisConfig",
    "load_config",
]
