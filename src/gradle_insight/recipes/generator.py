"""Recipe Generator: turns findings into a declarative OpenRewrite recipe.

Findings are grouped by (transformation type, generated config). The first
Finding of a group is copied as its representative and the copy's
occurrence counter absorbs every later identical Finding; the input list is
never mutated, so grouping the same findings twice gives the same result.

Manual findings are not transformations. They are rendered as comment
annotations in their own section after the recipe list.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..exceptions import RenderError
from ..logging_config import get_logger
from ..models import Finding, TransformationGroup
from .catalog import recipe_class

logger = get_logger(__name__)

RECIPE_FILE_NAME = "generated-migrations.yml"
ACTIVATE_RECIPE = "ActivateRecipe"
GENERATOR_NAME = "gradle-insight"
_MATCH_PREVIEW = 60


def _group_key(finding: Finding) -> tuple:
    return (finding.transformation, tuple(sorted(finding.config.items())))


def group_findings(findings: Iterable[Finding]) -> list[TransformationGroup]:
    """Deduplicate findings into transformation groups, in first-seen order."""
    groups: dict[tuple, TransformationGroup] = {}
    for finding in findings:
        key = _group_key(finding)
        group = groups.get(key)
        if group is None:
            representative = dataclasses.replace(
                finding, config=dict(finding.config), occurrences=1
            )
            groups[key] = TransformationGroup(representative, [finding.location])
        else:
            group.representative.occurrences += 1
            group.locations.append(finding.location)
    return list(groups.values())


def truncate(text: str, max_len: int = _MATCH_PREVIEW) -> str:
    text = text.replace("\n", " ").replace("\r", "")
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def escape_yaml(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class RecipeGenerator:
    """Render grouped findings as an OpenRewrite declarative recipe."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def render(
        self,
        groups: Sequence[TransformationGroup],
        complementary: Sequence[str] = (),
        generated_at: Optional[datetime] = None,
    ) -> str:
        automated = [g for g in groups if not g.representative.is_manual]
        manual = [g for g in groups if g.representative.is_manual]
        stamp = (generated_at or datetime.now()).isoformat(timespec="seconds")

        lines = [
            f"# Auto-generated by {GENERATOR_NAME}",
            f"# Generated: {stamp}",
            "# Review before applying - some transformations may need manual adjustment",
            "#",
            "# Usage:",
            f"#   {GENERATOR_NAME} run <project> --recipe {self.config.recipe_name} --dry-run",
            f"#   {GENERATOR_NAME} run <project> --recipe {self.config.recipe_name}",
            "",
            "---",
            "type: specs.openrewrite.org/v1beta/recipe",
            f"name: {self.config.recipe_name}",
            "displayName: Project-Specific Migrations",
            "description: |",
            "  Auto-generated recipe for project-specific patterns.",
            f"  Detected {len(automated)} unique transformation(s)"
            f" and {len(manual)} manual-review item(s).",
        ]

        activated = {
            g.representative.config.get("recipe")
            for g in automated
            if g.transformation == ACTIVATE_RECIPE
        }
        extra = [r for r in dict.fromkeys(complementary) if r not in activated]

        if not automated and not extra:
            lines.append("recipeList: []")
        else:
            lines.append("recipeList:")
            lines.extend(self._render_automated(automated))
            if extra:
                lines.append("")
                lines.append("  # Standard recipes to run alongside custom transformations")
                lines.extend(f"  - {recipe}" for recipe in extra)

        if manual:
            lines.append("")
            lines.append("# Manual review required (no automated fix)")
            lines.extend(self._render_manual(manual))

        return "\n".join(lines) + "\n"

    def _render_automated(self, groups: Sequence[TransformationGroup]) -> list[str]:
        by_type: dict[str, list[TransformationGroup]] = {}
        for group in groups:
            by_type.setdefault(group.transformation, []).append(group)

        lines: list[str] = []
        for transformation, members in by_type.items():
            lines.append("")
            lines.append(f"  # {transformation} transformations")
            for group in members:
                finding = group.representative
                if transformation == ACTIVATE_RECIPE:
                    lines.append(f"  - {finding.config['recipe']}")
                else:
                    lines.append(f"  - {recipe_class(transformation)}:")
                    for key, value in finding.config.items():
                        lines.append(f'      {key}: "{escape_yaml(value)}"')
                if group.occurrences > 1:
                    lines.append(f"      # Found {group.occurrences} occurrences")
        return lines

    def _render_manual(self, groups: Sequence[TransformationGroup]) -> list[str]:
        lines: list[str] = []
        for group in groups:
            finding = group.representative
            lines.append(f"  # MANUAL: {finding.description}")
            lines.append(f"  #   File: {finding.location}")
            lines.append(f"  #   Match: {truncate(finding.matched_text)}")
            lines.append(f"  #   Fix: {finding.suggested_fix}")
            if len(group.locations) > 1:
                lines.append(f"  #   Also at: {', '.join(group.locations[1:])}")
        return lines


def write_recipe(project_dir: Path, output_dir: str, text: str) -> Path:
    """Write ``text`` to ``<project>/<output_dir>/generated-migrations.yml``.

    Raises:
        RenderError: If the directory or file cannot be written
    """
    target = Path(project_dir) / output_dir / RECIPE_FILE_NAME
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as e:
        raise RenderError(target, str(e))
    logger.info(f"Wrote recipe to {target}")
    return target
