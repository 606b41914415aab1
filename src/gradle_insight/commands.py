"""Engine commands.

Each invocation of the tool is exactly one of these. The CLI builds one
from its arguments and hands it to ``engine.execute``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class ListRecipes:
    filter: Optional[str] = None


@dataclass(frozen=True)
class Suggest:
    path: Path


@dataclass(frozen=True)
class GenerateRecipe:
    path: Path


@dataclass(frozen=True)
class Analyze:
    path: Path


@dataclass(frozen=True)
class Run:
    path: Path
    recipes: tuple[str, ...] = field(default_factory=tuple)
    dry_run: bool = False


Command = Union[ListRecipes, Suggest, GenerateRecipe, Analyze, Run]
