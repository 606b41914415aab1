"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..commands import Command
from ..config import AnalysisConfig, load_config
from ..engine import EXIT_FAILURE, EXIT_INVALID_INPUT, execute
from ..exceptions import ConfigurationError, GradleInsightError
from ..formatters import get_formatter
from ..logging_config import setup_logging

console = Console()
err_console = Console(stderr=True)

PATH_HELP = "Gradle project root (default: current directory)"
QUIET_HELP = "Only log errors on stderr"
LOG_FILE_HELP = "Append full debug logs to this file"


def resolve_config(
    project: Optional[Path] = None,
    config: Optional[Path] = None,
    json_output: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    **overrides,
) -> AnalysisConfig:
    """Build the AnalysisConfig from CLI options."""
    if json_output:
        overrides["json_output"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(project_root=project, config_file=config, **overrides)


def run_command(
    command: Command,
    project: Optional[Path] = None,
    config_file: Optional[Path] = None,
    json_output: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    **overrides,
) -> None:
    """Execute one command, print its result and exit with its exit code.

    Logging starts from the CLI flags so configuration errors are reported,
    then is reconfigured from the merged AnalysisConfig.
    """
    logger = setup_logging("quiet" if quiet else "verbose" if verbose else "normal")

    try:
        config = resolve_config(
            project,
            config_file,
            json_output,
            verbose,
            quiet,
            log_file=str(log_file) if log_file else None,
            **overrides,
        )
        logger = setup_logging(config.verbosity, config.log_file)
        outcome = execute(command, config)
        get_formatter("json" if config.json_output else "rich").render(outcome.result)

    except ConfigurationError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_INVALID_INPUT)

    except GradleInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_FAILURE)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        err_console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    raise typer.Exit(outcome.exit_code)
