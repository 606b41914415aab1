"""Base formatter interface for Gradle Insight output rendering."""

from abc import ABC, abstractmethod
from typing import Any


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    ``result`` is any engine result object (AnalysisReport, SuggestionReport,
    RecipeListing, GeneratedRecipe or RunResult). Formatters never modify it.
    """

    @abstractmethod
    def render(self, result: Any) -> None:
        """Write the formatted result to stdout."""

    @abstractmethod
    def format(self, result: Any) -> str:
        """Return formatted string representation of the result."""
