"""JSON formatter for Gradle Insight."""

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .base import BaseFormatter


def to_jsonable(value: Any) -> Any:
    """Convert result objects to JSON-compatible structures.

    Dataclasses contribute their fields plus their public properties, so
    derived values like ``total_issues`` appear in the output.
    """
    if is_dataclass(value) and not isinstance(value, type):
        data = {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
        for name, attr in vars(type(value)).items():
            if isinstance(attr, property) and not name.startswith("_"):
                data[name] = to_jsonable(getattr(value, name))
        return data
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


class JsonFormatter(BaseFormatter):
    """Render results as JSON."""

    def render(self, result: Any) -> None:
        print(self.format(result))

    def format(self, result: Any) -> str:
        return json.dumps(to_jsonable(result), indent=2)
