"""
Result statistics, filtering and pagination.
Single responsibility: slice classified rows for presentation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence

from .models import ComparisonRow, RowType


PAGE_SIZES = (10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 25


@dataclass(frozen=True)
class ResultStats:
    """Counts per row type."""

    total: int = 0
    matches: int = 0
    differences: int = 0
    missing_in_compare: int = 0
    missing_in_source: int = 0

    @property
    def missing(self) -> int:
        return self.missing_in_compare + self.missing_in_source

    @property
    def match_rate(self) -> float:
        """Percentage of rows that matched, 2 decimals."""
        if self.total == 0:
            return 0
        return round(100 * self.matches / self.total, 2)

    def to_dict(self):
        return {
            "total": self.total,
            "matches": self.matches,
            "differences": self.differences,
            "missing_in_compare": self.missing_in_compare,
            "missing_in_source": self.missing_in_source,
            "match_rate": self.match_rate,
        }


def compute_stats(rows: Iterable[ComparisonRow]) -> ResultStats:
    counts = {row_type: 0 for row_type in RowType}
    total = 0
    for row in rows:
        counts[row.row_type] += 1
        total += 1
    return ResultStats(
        total=total,
        matches=counts[RowType.MATCH],
        differences=counts[RowType.DIFFERENT],
        missing_in_compare=counts[RowType.MISSING_IN_COMPARE],
        missing_in_source=counts[RowType.MISSING_IN_SOURCE],
    )


class ResultFilter(str, Enum):
    """Row selections offered by the results view."""

    ALL = "all"
    MATCH = "match"
    DIFFERENT = "different"
    MISSING = "missing"
    MISSING_IN_COMPARE = "missing-in-compare"
    MISSING_IN_SOURCE = "missing-in-source"

    def accepts(self, row: ComparisonRow) -> bool:
        if self is ResultFilter.ALL:
            return True
        if self is ResultFilter.MISSING:
            return row.is_missing
        return row.row_type.value == self.value


def filter_rows(rows: Iterable[ComparisonRow], result_filter=ResultFilter.ALL) -> List[ComparisonRow]:
    """
    Select rows of the requested kind, keeping their order.

    Args:
        rows: Classified rows
        result_filter: ResultFilter or its string value

    Raises:
        ValueError: If the filter name is unknown
    """
    result_filter = ResultFilter(result_filter)
    return [row for row in rows if result_filter.accepts(row)]


@dataclass
class Page:
    """One page of rows with its position in the full list."""

    rows: List[ComparisonRow] = field(default_factory=list)
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 1

    @property
    def start_index(self) -> int:
        """Zero-based index of the first row on this page."""
        return (self.page - 1) * self.per_page

    @property
    def end_index(self) -> int:
        """Zero-based index one past the last row on this page."""
        return min(self.start_index + self.per_page, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(rows: Sequence[ComparisonRow], page: int = 1,
             per_page: int = DEFAULT_PAGE_SIZE) -> Page:
    """
    Cut one page out of a row list.

    Pages are 1-based and clamped to the available range; an empty list
    still has one (empty) page.

    Raises:
        ValueError: If per_page is less than 1
    """
    if per_page < 1:
        raise ValueError("per_page must be >= 1")

    total_items = len(rows)
    total_pages = max(1, -(-total_items // per_page))
    page = min(max(1, page), total_pages)

    start = (page - 1) * per_page
    return Page(
        rows=list(rows[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_items=total_items,
        total_pages=total_pages,
    )


def page_window(current: int, total_pages: int, width: int = 5) -> List[int]:
    """
    Page numbers shown in a pager of fixed width.

    The window sticks to the first or last pages near either end and is
    centred on the current page otherwise.

    Examples:
        >>> page_window(1, 10)
        [1, 2, 3, 4, 5]
        >>> page_window(6, 10)
        [4, 5, 6, 7, 8]
        >>> page_window(10, 10)
        [6, 7, 8, 9, 10]
    """
    if total_pages <= width:
        return list(range(1, total_pages + 1))

    half = width // 2
    if current <= half + 1:
        first = 1
    elif current >= total_pages - half:
        first = total_pages - width + 1
    else:
        first = current - half
    return list(range(first, first + width))
