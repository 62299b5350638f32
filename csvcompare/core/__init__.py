"""Reconciliation engine."""

from .models import (
    Table,
    Record,
    MappingEntry,
    ColumnMapping,
    RowType,
    CellComparison,
    ComparisonRow
)
from .comparator import values_equal, normalized_equal, normalize_cell
from .key_builder import Side, build_key, JOIN_KEY_SEPARATOR
from .results import (
    ResultStats,
    ResultFilter,
    Page,
    compute_stats,
    filter_rows,
    paginate,
    page_window
)
from .reconciler import Reconciler, ReconciliationResult, reconcile
from .mapping import MappingError, suggest_mapping, validate_mapping, parse_mapping_args

__all__ = [
    "Table",
    "Record",
    "MappingEntry",
    "ColumnMapping",
    "RowType",
    "CellComparison",
    "ComparisonRow",
    "values_equal",
    "normalized_equal",
    "normalize_cell",
    "Side",
    "build_key",
    "JOIN_KEY_SEPARATOR",
    "ResultStats",
    "ResultFilter",
    "Page",
    "compute_stats",
    "filter_rows",
    "paginate",
    "page_window",
    "Reconciler",
    "ReconciliationResult",
    "reconcile",
    "MappingError",
    "suggest_mapping",
    "validate_mapping",
    "parse_mapping_args",
]
