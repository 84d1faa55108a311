"""
rigdoctor doctor - rig health checker and auto-fixer

Usage:
    rigdoctor doctor --rig gastown             # Check only (read-only)
    rigdoctor doctor --rig gastown --fix       # Auto-fix issues
    rigdoctor doctor --rig gastown --json      # Machine-readable report
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console

from rigdoctor.config import load_settings
from rigdoctor.core.doctor import (
    CheckContext,
    CheckNotFoundError,
    default_doctor,
    print_fix_summary,
    print_report,
)
from rigdoctor.core.logging import configure_logging

console = Console()


@click.command()
@click.option("--rig", "rig_name", default=None, help="Rig to check (default: from settings)")
@click.option(
    "--town-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the rigs (default: from settings, else cwd)",
)
@click.option("--check", "selected", multiple=True, help="Only run the named check (repeatable)")
@click.option("--fix", is_flag=True, default=False, help="Repair what the checks find")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging")
def doctor(rig_name, town_root, selected, fix, as_json, verbose):
    """
    Rig health checks and auto-fix

    Read-only by default; prints fix hints for failed checks.
    Use --fix to apply them, then the checks are run again to confirm.
    """
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    ctx = CheckContext(
        town_root=town_root or settings.get_town_root(),
        rig_name=rig_name if rig_name is not None else settings.default_rig,
    )

    doc = default_doctor()
    names = list(selected) or [n for n in doc.names if n not in settings.checks_disabled]

    try:
        report = doc.run(ctx, names)
    except CheckNotFoundError as e:
        raise click.BadParameter(str(e), param_hint="--check")

    if not fix:
        if as_json:
            click.echo(json.dumps(report.to_dict(), indent=2))
        else:
            print_report(report, out=console)
        sys.exit(1 if report.has_errors else 0)

    if not report.has_errors:
        if as_json:
            click.echo(json.dumps({"fixes": [], "report": report.to_dict()}, indent=2))
        else:
            console.print("[bold green]✨ All checks passed, nothing to fix[/bold green]")
        sys.exit(0)

    fixes = doc.fix(ctx, names)
    confirm = doc.run(ctx, names)

    if as_json:
        click.echo(json.dumps({
            "fixes": [f.to_dict() for f in fixes],
            "report": confirm.to_dict(),
        }, indent=2))
    else:
        print_fix_summary(fixes, out=console)
        print_report(confirm, show_fix_hints=False, out=console)

    sys.exit(1 if confirm.has_errors else 0)
