"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from tsdoc_coverage.models.coverage import CoverageSummary

console = Console()

_HIGH_COVERAGE = 80.0
_MEDIUM_COVERAGE = 50.0

COLUMNS = (
    "File Path",
    "Total Declarations",
    "Documented Declarations",
    "Undocumented Lines",
    "Percentage",
)


def _coverage_color(documented: int, total: int) -> str:
    """Return a Rich color name for a documented/total ratio."""
    if total == 0:
        return "dim"
    percentage = documented / total * 100
    if percentage >= _HIGH_COVERAGE:
        return "green"
    if percentage >= _MEDIUM_COVERAGE:
        return "yellow"
    return "red"


class CLIReporter:
    """Rich terminal output for coverage reports."""

    def __init__(self) -> None:
        """Initialize the CLI reporter."""
        self.console = console

    def build_coverage_table(self, summary: CoverageSummary) -> Table:
        """Build the per-file table with a trailing Total row."""
        table = Table(title="Documentation Coverage", title_style="bold cyan")
        table.add_column(COLUMNS[0], style="bold")
        table.add_column(COLUMNS[1], justify="right")
        table.add_column(COLUMNS[2], justify="right")
        table.add_column(COLUMNS[3])
        table.add_column(COLUMNS[4], justify="right")

        for file in summary.files:
            color = _coverage_color(file.documented, file.total)
            table.add_row(
                escape(file.file_path),
                str(file.total),
                str(file.documented),
                file.undocumented_lines,
                f"[{color}]{file.percentage}[/{color}]",
            )

        color = _coverage_color(summary.documented, summary.total)
        table.add_section()
        table.add_row(
            "[bold]Total[/bold]",
            f"[bold]{summary.total}[/bold]",
            f"[bold]{summary.documented}[/bold]",
            "",
            f"[bold {color}]{summary.percentage}[/bold {color}]",
        )
        return table

    def print_coverage_summary(self, summary: CoverageSummary) -> None:
        """Print the coverage table."""
        self.console.print(self.build_coverage_table(summary))


# Singleton instance for easy import
reporter = CLIReporter()
