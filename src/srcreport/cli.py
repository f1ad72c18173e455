"""Command-line interface for srcreport."""

from __future__ import annotations

import click

from . import __version__
from .logging_config import setup_logging
from .report import build_report

_DIRECTORY = click.Path(exists=True, file_okay=False, dir_okay=True, readable=True)


@click.command()
@click.argument("old_dir", type=_DIRECTORY)
@click.argument("new_dir", type=_DIRECTORY)
@click.option(
    "--flush-tail/--no-flush-tail",
    default=False,
    envvar="SRCREPORT_FLUSH_TAIL",
    show_default=True,
    help="Also count the last hunk of the diff, which historical reports drop.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr.")
@click.version_option(__version__, prog_name="srcreport")
def cli(old_dir: str, new_dir: str, flush_tail: bool, verbose: bool) -> None:
    """Count files and lines in OLD_DIR and NEW_DIR and classify their differences."""
    setup_logging("DEBUG" if verbose else None)
    try:
        report = build_report(old_dir, new_dir, flush_tail=flush_tail)
    except Exception as e:
        click.echo(f"Error building report: {e}", err=True)
        raise click.ClickException(str(e))

    for line in report.lines():
        click.echo(line)
