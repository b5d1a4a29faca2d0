"""
Console reporter: renders findings as a table for the terminal.
"""

import io
import logging

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ghacheck.rules.engine import Finding

logger = logging.getLogger(__name__)

NO_ISSUES = "No issues found!"

LEVEL_STYLES = {
    "error": "red",
    "warning": "yellow",
    "note": "cyan",
}


def build_table(findings: list[Finding]) -> Table:
    """Build a rich Table with one row per finding."""
    table = Table(show_lines=True)
    table.add_column("Job", style="bold", no_wrap=True)
    table.add_column("Message")
    table.add_column("Detail")

    for f in findings:
        style = LEVEL_STYLES.get(f.level, "")
        # Text() so brackets in messages are not parsed as markup
        table.add_row(Text(f.scope), Text(f.message, style=style), Text(f.detail))
    return table


def report_console(findings: list[Finding], width: int = 120, color: bool = False) -> str:
    """
    Format findings as a table.

    Args:
        findings: List of Finding objects to report.
        width: Width of the rendered table in characters.
        color: Emit ANSI colors (only useful when writing to a terminal).

    Returns:
        The rendered table, or the "no issues" message when there are none.
    """
    if not findings:
        return NO_ISSUES

    buffer = io.StringIO()
    console = Console(file=buffer, width=width, force_terminal=color, no_color=not color)
    console.print(build_table(findings))
    report = buffer.getvalue()
    logger.info("Console report: %d finding(s)", len(findings))
    return report.rstrip("\n")
