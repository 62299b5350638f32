"""
Rich terminal report.
Single responsibility: render comparison results for the console.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from ..core.models import ColumnMapping, ComparisonRow, RowType
from ..core.results import Page, ResultStats, page_window
from ..utils.logger import get_logger


logger = get_logger()


ROW_STYLES = {
    RowType.MATCH: "green",
    RowType.DIFFERENT: "yellow",
    RowType.MISSING_IN_COMPARE: "red",
    RowType.MISSING_IN_SOURCE: "blue",
}

ROW_LABELS = {
    RowType.MATCH: "Match",
    RowType.DIFFERENT: "Different",
    RowType.MISSING_IN_COMPARE: "Missing in compare",
    RowType.MISSING_IN_SOURCE: "Missing in source",
}


class ResultReporter:
    """
    Renders result statistics and result pages using Rich.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize reporter.

        Args:
            console: Rich console (a default stdout console if omitted)
        """
        self.console = console or Console()

    def print_summary(self, stats: ResultStats, source_name: str = "source",
                      compare_name: str = "compare"):
        """
        Print the summary panel.

        Args:
            stats: Counts for the run
            source_name: Label for the source table
            compare_name: Label for the compare table
        """
        grid = Table.grid(padding=(0, 3))
        grid.add_column(justify="right", style="bold")
        grid.add_column()

        grid.add_row(str(stats.total), "Total records")
        grid.add_row(Text(str(stats.matches), style="green"), "Matches")
        grid.add_row(Text(str(stats.differences), style="yellow"), "Differences")
        grid.add_row(Text(str(stats.missing_in_compare), style="red"),
                     Text(f"Only in {source_name}"))
        grid.add_row(Text(str(stats.missing_in_source), style="blue"),
                     Text(f"Only in {compare_name}"))
        grid.add_row(f"{stats.match_rate}%", "Match rate")

        self.console.print(Panel(
            grid,
            title=Text(f"{source_name} vs {compare_name}"),
            box=box.ROUNDED,
            style="cyan",
        ))

    def _cell(self, row: ComparisonRow, source_column: str,
              compare_column: str) -> Text:
        if row.row_type is RowType.MISSING_IN_SOURCE:
            return Text((row.compare_data or {}).get(compare_column, ""))
        if row.row_type is RowType.MISSING_IN_COMPARE:
            return Text((row.source_data or {}).get(source_column, ""))

        cell = row.unified.get(source_column)
        if cell is None:
            return Text("")
        if cell.is_different:
            text = Text(cell.source_value or "(empty)", style="red")
            text.append(" → ", style="dim")
            text.append(cell.compare_value or "(empty)", style="green")
            return text
        return Text(cell.source_value)

    def build_table(self, page: Page, mapping: ColumnMapping) -> Table:
        """Build the Rich table for one page of rows."""
        table = Table(box=box.SIMPLE_HEAVY, show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Status")
        table.add_column("Key", style="dim")
        for entry in mapping:
            header = entry.source_column
            if entry.compare_column != entry.source_column:
                header = f"{entry.source_column} / {entry.compare_column}"
            table.add_column(Text(header))

        for offset, row in enumerate(page.rows):
            cells = [
                str(page.start_index + offset + 1),
                Text(ROW_LABELS[row.row_type], style=ROW_STYLES[row.row_type]),
                Text(row.key),
            ]
            for entry in mapping:
                cells.append(self._cell(row, entry.source_column, entry.compare_column))
            table.add_row(*cells)

        return table

    def print_page(self, page: Page, mapping: ColumnMapping):
        """
        Print one page of results with its position line.

        Args:
            page: Page from paginate()
            mapping: Mapping used for the run
        """
        if not page.total_items:
            self.console.print("[dim]No results match the current filter criteria.[/dim]")
            return

        self.console.print(self.build_table(page, mapping))

        pages = " ".join(
            f"[bold]{n}[/bold]" if n == page.page else str(n)
            for n in page_window(page.page, page.total_pages)
        )
        self.console.print(
            f"Showing {page.start_index + 1} to {page.end_index} of "
            f"{page.total_items} results   Page {pages} of {page.total_pages}"
        )
        logger.debug("report.page_rendered",
                    page=page.page,
                    rows=len(page.rows))
