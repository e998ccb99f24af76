from __future__ import annotations

"""
Typer CLI entry point for eslint-disable-scanner.

Detects the ESLint config style at the target directory (flat or legacy),
runs the scan, prints the grouped report, and maps the outcome to an exit
code: 0 when nothing unjustified was found, 1 otherwise.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from disable_scanner.config import DEFAULT_NODE_EXECUTABLE, ScanConfig
from disable_scanner.errors import ConfigNotFoundError, ScanError, UnjustifiedSuppressionError
from disable_scanner.scan import run_checker

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Report eslint-disable comments that suppress active ESLint rules.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def check(
    root: Path = typer.Argument(
        Path("."),
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Project directory containing the ESLint config.",
    ),
    node: str = typer.Option(
        DEFAULT_NODE_EXECUTABLE,
        "--node",
        help="Node.js executable used to load the project's ESLint.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """
    Scan ROOT for eslint-disable comments and fail on unjustified error rules.
    """
    _configure_logging(verbose)
    console = Console()
    err_console = Console(stderr=True)

    try:
        config = ScanConfig.for_root(root, node_executable=node)
    except ConfigNotFoundError as e:
        err_console.print(f"[cyan]{escape(str(e))}.[/cyan]")
        raise typer.Exit(code=1)

    try:
        run_checker(config.root, config=config, console=console)
    except UnjustifiedSuppressionError as e:
        err_console.print(f"[bold red]✖ {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)
    except ScanError as e:
        logger.debug("Scan aborted", exc_info=True)
        err_console.print(f"[bold red]✖ {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for `python -m disable_scanner.main` and the console script."""
    app()


if __name__ == "__main__":
    main()
