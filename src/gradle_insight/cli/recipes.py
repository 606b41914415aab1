"""Recipe commands: list, generate-recipe and run."""

from pathlib import Path
from typing import Optional

import typer

from ..commands import GenerateRecipe, ListRecipes, Run
from . import app
from ._common import LOG_FILE_HELP, PATH_HELP, QUIET_HELP, run_command


def _split(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


@app.command("list")
def list_recipes(
    filter: Optional[str] = typer.Argument(None, help="Case-insensitive name/description filter"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Diagnostic logging on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help=LOG_FILE_HELP),
):
    """
    List known OpenRewrite recipes for Gradle builds.

    [bold cyan]Examples:[/bold cyan]

      gradle-insight list

      gradle-insight list kotlin
    """
    run_command(
        ListRecipes(filter),
        json_output=json_output,
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
    )


@app.command("generate-recipe")
def generate_recipe(
    path: Path = typer.Argument(Path("."), help=PATH_HELP),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for generated-migrations.yml, relative to the project (default: .rewrite)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Diagnostic logging on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help=LOG_FILE_HELP),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
    ),
):
    """
    Generate a declarative OpenRewrite recipe from the project's findings.

    [bold cyan]Examples:[/bold cyan]

      gradle-insight generate-recipe .

      gradle-insight generate-recipe . --output-dir rewrite
    """
    run_command(
        GenerateRecipe(path),
        project=path,
        config_file=config,
        json_output=json_output,
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        output_dir=output_dir,
    )


@app.command()
def run(
    path: Path = typer.Argument(Path("."), help=PATH_HELP),
    recipe: Optional[str] = typer.Option(
        None,
        "--recipe",
        "-r",
        help="Comma-separated recipe names to activate",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Preview changes; project files are left byte-identical",
    ),
    fail_on_dry_run: bool = typer.Option(
        False,
        "--fail-on-dry-run",
        help="Exit 1 if a dry run would change files",
    ),
    additional_deps: Optional[str] = typer.Option(
        None,
        "--additional-deps",
        help="Comma-separated extra classpath coordinates for the init script",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Diagnostic logging on stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help=LOG_FILE_HELP),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
    ),
):
    """
    Run OpenRewrite recipes through a temporary Gradle init script.

    [bold cyan]Examples:[/bold cyan]

      gradle-insight run . --recipe org.openrewrite.gradle.MigrateToGradle9 --dry-run

      gradle-insight run . --recipe com.generated.ProjectMigrations
    """
    run_command(
        Run(path, _split(recipe), dry_run),
        project=path,
        config_file=config,
        json_output=json_output,
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        fail_on_dry_run=fail_on_dry_run or None,
        additional_deps=_split(additional_deps) or None,
    )
