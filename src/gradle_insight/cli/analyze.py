"""Project analysis commands: analyze and suggest."""

from pathlib import Path
from typing import Optional

import typer

from ..commands import Analyze, Suggest
from . import app
from ._common import LOG_FILE_HELP, PATH_HELP, QUIET_HELP, run_command


@app.command()
def analyze(
    path: Path = typer.Argument(Path("."), help=PATH_HELP),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Diagnostic logging on stderr",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help=LOG_FILE_HELP),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        help="Gradle version to migrate to (default: 9.2.1)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel scan workers (default: auto-detect)",
        min=1,
        max=32,
        hidden=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
    ),
):
    """
    Analyze a Gradle build: issues, complexity, strategy and migration plan.

    Exits with 1 when any issue is found.

    [bold cyan]Examples:[/bold cyan]

      gradle-insight analyze .

      gradle-insight analyze path/to/project --json
    """
    run_command(
        Analyze(path),
        project=path,
        config_file=config,
        json_output=json_output,
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        target_version=target,
        workers=workers,
    )


@app.command()
def suggest(
    path: Path = typer.Argument(Path("."), help=PATH_HELP),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Diagnostic logging on stderr",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help=LOG_FILE_HELP),
    target: Optional[str] = typer.Option(
        None,
        "--target",
        help="Gradle version to migrate to (default: 9.2.1)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
    ),
):
    """
    Suggest standard OpenRewrite recipes for a project, with confidence.

    [bold cyan]Examples:[/bold cyan]

      gradle-insight suggest .
    """
    run_command(
        Suggest(path),
        project=path,
        config_file=config,
        json_output=json_output,
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        target_version=target,
    )
