"""
Doctor report formatting

Provides clean, actionable output with:
- Status icons
- Per-item details under each check
- Fix hints when something failed
"""

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .models import CheckStatus, FixResult
from .runner import DoctorReport

console = Console()

_STYLES = {
    CheckStatus.OK: ("✅", "green"),
    CheckStatus.WARNING: ("⚠️", "yellow"),
    CheckStatus.ERROR: ("❌", "red"),
}


def print_report(report: DoctorReport, show_fix_hints: bool = True, out: Optional[Console] = None):
    """Print check results in a clean table"""
    out = out or console
    out.print()
    out.print("[bold cyan]Rig doctor[/bold cyan]")
    out.print()

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Status", width=6, justify="center")
    table.add_column("Check", width=20)
    table.add_column("Result", width=60)

    for result in report.results:
        icon, style = _STYLES[result.status]

        summary = result.message
        if result.details:
            summary += "\n" + "\n".join(f"  • {d}" for d in result.details)

        table.add_row(
            f"[{style}]{icon}[/{style}]",
            result.name,
            f"[{style}]{summary}[/{style}]",
        )

    out.print(table)
    out.print()

    total = len(report.results)
    if report.error_count == 0 and report.warning_count == 0:
        out.print(f"[bold green]✨ All checks passed ({report.ok_count}/{total})[/bold green]")
    else:
        out.print(
            f"[bold]Total:[/bold] {report.ok_count} ok, "
            f"{report.warning_count} warning, {report.error_count} error"
        )
    out.print()

    if show_fix_hints and report.has_errors:
        print_fix_hints(report, out=out)


def print_fix_hints(report: DoctorReport, out: Optional[Console] = None):
    """Print how to repair each failed check"""
    out = out or console
    hints = [r for r in report.results if r.status == CheckStatus.ERROR and r.fix_hint]
    if not hints:
        return

    out.print("[bold yellow]Suggested fixes:[/bold yellow]")
    out.print()
    for result in hints:
        out.print(f"  [cyan]• {result.name}:[/cyan] {result.fix_hint}")
    out.print()


def print_fix_summary(results: List[FixResult], out: Optional[Console] = None):
    """Print fix results"""
    out = out or console
    out.print()
    out.print("[bold cyan]Fix results[/bold cyan]")
    out.print()

    if not results:
        out.print("[bold green]✨ Nothing to fix[/bold green]")
        out.print()
        return

    fail_count = 0
    for result in results:
        if result.success:
            icon, style = "✅", "green"
        else:
            icon, style = "❌", "red"
            fail_count += 1

        out.print(f"{icon} [{style}]{result.check_name}:[/{style}] {result.message}")
        for detail in result.details or []:
            out.print(f"  [dim]{detail}[/dim]")

    out.print()
    if fail_count:
        out.print(f"[yellow]Some fixes failed ({fail_count}/{len(results)})[/yellow]")
        out.print()
