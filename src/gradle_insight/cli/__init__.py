"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="gradle-insight",
    help="Gradle Insight - Gradle build analysis and OpenRewrite recipe generation",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Gradle Insight[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Analyze Gradle builds and generate OpenRewrite migration recipes.

    [bold cyan]Exit codes:[/bold cyan] 0 success, 1 issues found or execution
    failure, 2 invalid input.
    """


# Import subcommands to register them
from .analyze import analyze as _analyze, suggest as _suggest  # noqa: F401, E402
from .recipes import (  # noqa: F401, E402
    generate_recipe as _generate_recipe,
    list_recipes as _list_recipes,
    run as _run,
)
