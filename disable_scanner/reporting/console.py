# Rich console output: findings grouped by file, then the verdict message.

from __future__ import annotations

from typing import Dict, List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from disable_scanner.findings.models import Finding, ScanVerdict

# Severity → Rich style
SEVERITY_STYLE = {
    "error": "bold red",
    "warning": "bold yellow",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.lower(), DEFAULT_SEVERITY_STYLE)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def group_by_file(findings: List[Finding]) -> Dict[str, List[Finding]]:
    """Group findings by file, keeping discovery order for files and findings."""
    by_file: Dict[str, List[Finding]] = {}
    for f in findings:
        by_file.setdefault(f.file_path, []).append(f)
    return by_file


def print_scan_header(console: Console) -> None:
    console.print()
    console.print("[cyan]Running eslint-disable-scanner...[/cyan]")
    console.print()


def _justification_cell(finding: Finding) -> Text:
    if finding.justification_missing:
        style = "bold red" if finding.severity == "error" else "dim"
        return Text("missing", style=style)
    return Text(finding.justification or "", style="green")


def _print_file(path: str, file_findings: List[Finding], console: Console) -> None:
    console.print(Panel(
        f"[bold cyan]{path}[/bold cyan]",
        box=box.SIMPLE_HEAD,
        border_style="blue",
        padding=(0, 1),
    ))

    table = Table(
        show_header=True,
        header_style="bold magenta",
        box=box.SIMPLE,
        padding=(0, 1),
        expand=False,
    )
    table.add_column("Pos", justify="right", style="dim")
    table.add_column("Severity", width=8)
    table.add_column("Rule")
    table.add_column("Justification")

    for f in file_findings:
        table.add_row(
            f"{f.line}:{f.column}",
            Text(f.severity, style=_severity_style(f.severity)),
            Text(f.rule_name, style="bold"),
            _justification_cell(f),
        )
    console.print(table)


def print_report(verdict: ScanVerdict, console: Console) -> None:
    """
    Print every finding grouped by file, followed by the outcome message.

    The report is always complete; a failing verdict is raised by the caller
    only after this returns.
    """
    if not verdict.findings:
        console.print("[green]✔ No disabled ESLint rules found.[/green]")
        console.print()
        return

    console.print(
        Text(
            f"✖ Found {_plural(verdict.error_count, 'error rule')} and "
            f"{_plural(verdict.warning_count, 'warning rule')} disabled:",
            style="bold magenta",
        )
    )

    for path, file_findings in group_by_file(verdict.findings).items():
        _print_file(path, file_findings, console)

    _print_summary(verdict, console)


def _print_summary(verdict: ScanVerdict, console: Console) -> None:
    if verdict.should_fail:
        body = (
            f"[bold red]{_plural(verdict.unjustified_error_count, 'error rule')} "
            "disabled without justification.[/bold red]"
        )
        border = "red"
    elif verdict.error_count:
        body = (
            "[yellow]All disabled error rules carry a justification. "
            "Process will continue.[/yellow]"
        )
        border = "yellow"
    else:
        body = "[yellow]Only warning rules were disabled. Process will continue.[/yellow]"
        border = "yellow"

    console.print()
    console.print(Panel(body, title="Summary", border_style=border, box=box.ROUNDED))
