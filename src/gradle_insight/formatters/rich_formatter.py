"""Rich terminal formatter for Gradle Insight."""

from io import StringIO
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import (
    AnalysisReport,
    ComplexityTier,
    GeneratedRecipe,
    RecipeListing,
    RunResult,
    SuggestionReport,
)
from .base import BaseFormatter

_TIER_STYLES = {
    ComplexityTier.SMALL: "green",
    ComplexityTier.MEDIUM: "yellow",
    ComplexityTier.LARGE: "red",
}


def _confidence_label(conf: float) -> str:
    if conf >= 0.85:
        return f"[green]{conf:.0%}[/green]"
    elif conf >= 0.75:
        return f"[yellow]{conf:.0%}[/yellow]"
    else:
        return f"[dim]{conf:.0%}[/dim]"


class RichFormatter(BaseFormatter):
    """Panels and tables for every engine result."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, result: Any) -> None:
        self._render_to(self.console, result)

    def format(self, result: Any) -> str:
        buffer = StringIO()
        self._render_to(Console(file=buffer, width=100, force_terminal=False), result)
        return buffer.getvalue()

    def _render_to(self, console: Console, result: Any) -> None:
        if isinstance(result, AnalysisReport):
            self._print_analysis(console, result)
        elif isinstance(result, SuggestionReport):
            self._print_suggestions(console, result)
        elif isinstance(result, RecipeListing):
            self._print_listing(console, result)
        elif isinstance(result, GeneratedRecipe):
            self._print_generated(console, result)
        elif isinstance(result, RunResult):
            self._print_run(console, result)
        else:
            raise TypeError(f"Cannot format {type(result).__name__}")

        warnings = getattr(result, "warnings", [])
        if warnings:
            console.print()
            for warning in warnings:
                console.print(f"[yellow]Warning:[/yellow] {warning}")

    # ── Analysis ───────────────────────────────────────────────

    def _print_analysis(self, console: Console, report: AnalysisReport) -> None:
        snapshot = report.snapshot
        style = _TIER_STYLES[report.complexity]
        console.print(
            Panel(
                f"[bold]Gradle:[/bold] {snapshot.gradle_version}\n"
                f"[bold]Modules:[/bold] {snapshot.module_count}\n"
                f"[bold]Build files:[/bold] {snapshot.total_files} "
                f"({snapshot.groovy_files} Groovy, {snapshot.kotlin_files} Kotlin)\n"
                f"[bold]Lines:[/bold] {snapshot.total_lines}\n"
                f"[bold]Complexity:[/bold] [{style}]{report.complexity.value}[/{style}]\n"
                f"[bold]Strategy:[/bold] {report.strategy.label}",
                title=f"[bold cyan]Project Analysis[/bold cyan] {report.project_path}",
                expand=False,
            )
        )

        if report.category_counts:
            table = Table(title=f"Issues ({report.total_issues})", show_lines=False)
            table.add_column("Category", style="cyan")
            table.add_column("Count", justify="right")
            for category, count in report.category_counts.items():
                table.add_row(category, str(count))
            console.print(table)
        else:
            console.print("[green]No issues detected.[/green]")

        plan = Table(title="Migration Plan")
        plan.add_column("#", justify="right", style="dim")
        plan.add_column("Step")
        plan.add_column("Engine", style="magenta")
        plan.add_column("Estimate", justify="right")
        for step in report.migration_plan:
            description = step.description
            if step.optional:
                description = f"[dim]{description}[/dim]"
            plan.add_row(str(step.order), description, step.engine.value, step.estimate)
        console.print(plan)

        if report.recipe:
            console.print(
                "[dim]Run 'gradle-insight generate-recipe' to write the project recipe.[/dim]"
            )

    # ── Suggestions & catalog ─────────────────────────────────

    def _print_suggestions(self, console: Console, report: SuggestionReport) -> None:
        console.print(f"[bold]Gradle version:[/bold] {report.gradle_version}")
        if not report.suggestions:
            console.print("[green]No recipe suggestions for this project.[/green]")
            return

        table = Table(title="Suggested Recipes")
        table.add_column("Recipe", style="cyan")
        table.add_column("Why")
        table.add_column("Confidence", justify="right")
        for s in report.suggestions:
            name = s.recipe if not s.options else f"{s.recipe}\n[dim]{s.options}[/dim]"
            table.add_row(name, s.description, _confidence_label(s.confidence))
        console.print(table)

    def _print_listing(self, console: Console, listing: RecipeListing) -> None:
        if not listing.recipes:
            console.print(f"[yellow]No recipes match '{listing.filter}'.[/yellow]")
            return

        title = "Available Recipes"
        if listing.filter:
            title += f" matching '{listing.filter}'"
        table = Table(title=title)
        table.add_column("Recipe", style="cyan")
        table.add_column("Description")
        table.add_column("Options", style="dim")
        for recipe in listing.recipes:
            table.add_row(recipe.name, recipe.description, ", ".join(recipe.options))
        console.print(table)

    # ── Generate & run ────────────────────────────────────────

    def _print_generated(self, console: Console, result: GeneratedRecipe) -> None:
        if not result.groups:
            console.print(f"[green]{result.message}.[/green]")
            console.print("Standard OpenRewrite recipes should cover your migration needs.")
            return

        console.print(f"[bold green]{result.message}[/bold green]")
        table = Table(title="Detected Transformations")
        table.add_column("Type", style="cyan")
        table.add_column("Automated", justify="right")
        table.add_column("Manual", justify="right")

        by_type: dict[str, list[int]] = {}
        for group in result.groups:
            counts = by_type.setdefault(group.transformation, [0, 0])
            counts[1 if group.representative.is_manual else 0] += group.occurrences
        for transformation, (automated, manual) in by_type.items():
            table.add_row(transformation, str(automated), str(manual))
        console.print(table)

        console.print(
            f"{result.automated_count} automated, {result.manual_count} manual-review group(s)"
        )
        if result.output_file:
            console.print(f"[bold]Recipe written to:[/bold] {result.output_file}")

    def _print_run(self, console: Console, result: RunResult) -> None:
        mode = "Dry run" if result.dry_run else "Run"
        status = "[green]succeeded[/green]" if result.success else "[red]failed[/red]"
        lines = [
            f"[bold]Gradle:[/bold] {result.gradle_version}",
            f"[bold]Recipes:[/bold] {', '.join(result.recipes)}",
            f"[bold]Duration:[/bold] {result.duration_ms} ms",
            f"[bold]Files changed:[/bold] {result.changes_detected}",
        ]
        if result.error:
            lines.append(f"[bold]Error:[/bold] [red]{result.error}[/red]")
        console.print(Panel("\n".join(lines), title=f"{mode} {status}", expand=False))

        for path in result.changed_files:
            console.print(f"  [cyan]{path}[/cyan]")
        if result.restored_files:
            console.print(
                f"[dim]Restored {len(result.restored_files)} file(s) touched during the dry run[/dim]"
            )
        if result.dry_run and result.changes_detected:
            console.print("Run again without --dry-run to apply the changes.")
