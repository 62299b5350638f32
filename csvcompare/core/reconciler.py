"""
Core reconciliation logic.
Single responsibility: classify every logical record of two tables.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.settings import ComparisonSettings
from ..utils.logger import get_logger
from .comparator import values_equal
from .key_builder import Side, build_key
from .models import (
    CellComparison,
    ColumnMapping,
    ComparisonRow,
    Record,
    RowType,
    Table,
)
from .results import ResultStats, compute_stats


logger = get_logger()


@dataclass
class ReconciliationResult:
    """Rows from one run plus the input counts behind them."""

    rows: List[ComparisonRow] = field(default_factory=list)
    source_rows: int = 0
    compare_rows: int = 0
    source_keys: int = 0
    compare_keys: int = 0

    @property
    def stats(self) -> ResultStats:
        return compute_stats(self.rows)

    @property
    def duplicate_source_rows(self) -> int:
        """Source rows dropped because a later row had the same key."""
        return self.source_rows - self.source_keys

    @property
    def duplicate_compare_rows(self) -> int:
        return self.compare_rows - self.compare_keys

    @property
    def has_differences(self) -> bool:
        return any(not row.is_match for row in self.rows)


class Reconciler:
    """
    Reconcile a source table against a compare table.

    Stateless across runs: settings are fixed per instance and every call
    builds fresh indexes, so one instance may be reused or shared.
    """

    def __init__(self, settings: ComparisonSettings = None):
        """
        Initialize reconciler.

        Args:
            settings: Tolerance options (defaults to ComparisonSettings())
        """
        self.settings = settings or ComparisonSettings()

    def reconcile(self, source: Table, compare: Table,
                  mapping: ColumnMapping,
                  key_columns: Optional[Sequence[str]] = None) -> ReconciliationResult:
        """
        Classify records as match, different or missing on one side.

        Records join on the normalized values of every mapped column unless
        key_columns names a subset of the mapped source columns; all mapped
        columns are compared cell by cell either way.

        Output order: source-keyed rows (MATCH, DIFFERENT, MISSING_IN_COMPARE)
        in source order, then MISSING_IN_SOURCE rows in compare order.
        Duplicate keys within a table keep the last row in that table.

        Args:
            source: Source table
            compare: Compare table
            mapping: Non-empty column mapping (not validated here)
            key_columns: Optional source columns that identify a record

        Returns:
            ReconciliationResult
        """
        logger.info("reconciler.starting",
                   source=source.name or "source",
                   compare=compare.name or "compare",
                   source_rows=len(source),
                   compare_rows=len(compare),
                   mapped_columns=len(mapping),
                   key_columns=list(key_columns) if key_columns else "all")

        key_mapping = mapping.subset(key_columns) if key_columns else mapping

        source_index = self._build_index(source, key_mapping, Side.SOURCE)
        compare_index = self._build_index(compare, key_mapping, Side.COMPARE)

        rows: List[ComparisonRow] = []
        processed = set()

        for key, source_record in source_index.items():
            processed.add(key)
            compare_record = compare_index.get(key)

            if compare_record is None:
                rows.append(ComparisonRow.missing_in_compare(key, source_record))
            else:
                rows.append(self._compare_records(key, source_record,
                                                  compare_record, mapping))

        for key, compare_record in compare_index.items():
            if key not in processed:
                rows.append(ComparisonRow.missing_in_source(key, compare_record))

        result = ReconciliationResult(
            rows=rows,
            source_rows=len(source),
            compare_rows=len(compare),
            source_keys=len(source_index),
            compare_keys=len(compare_index),
        )

        if result.duplicate_source_rows or result.duplicate_compare_rows:
            logger.warning("reconciler.duplicate_keys",
                          source_collapsed=result.duplicate_source_rows,
                          compare_collapsed=result.duplicate_compare_rows)

        stats = result.stats
        logger.info("reconciler.complete",
                   matches=stats.matches,
                   differences=stats.differences,
                   missing_in_compare=stats.missing_in_compare,
                   missing_in_source=stats.missing_in_source)

        return result

    def _build_index(self, table: Table, mapping: ColumnMapping,
                     side: Side) -> Dict[str, Record]:
        """Key -> record, first-insertion order, last write wins."""
        index: Dict[str, Record] = {}
        for record in table.records():
            index[build_key(record, mapping, side, self.settings)] = record

        logger.debug("reconciler.index_built",
                    side=side.value,
                    rows=len(table),
                    keys=len(index))
        return index

    def _compare_records(self, key: str, source_record: Record,
                         compare_record: Record,
                         mapping: ColumnMapping) -> ComparisonRow:
        """Cell-level diff of two records sharing a key."""
        differences, unified = self._diff_cells(source_record, compare_record, mapping)
        return ComparisonRow(
            row_type=RowType.DIFFERENT if differences else RowType.MATCH,
            key=key,
            source_data=source_record,
            compare_data=compare_record,
            differences=differences,
            unified=unified,
        )

    def _diff_cells(self, source_record: Record, compare_record: Record,
                    mapping: ColumnMapping) -> Tuple[List[str], Dict[str, CellComparison]]:
        differences: List[str] = []
        unified: Dict[str, CellComparison] = {}

        for entry in mapping:
            source_value = source_record.get(entry.source_column, "")
            compare_value = compare_record.get(entry.compare_column, "")

            # Two empty cells are never a difference
            is_different = (
                not values_equal(source_value, compare_value, self.settings)
                and bool(source_value or compare_value)
            )

            unified[entry.source_column] = CellComparison(
                source_value, compare_value, is_different
            )
            if is_different:
                differences.append(entry.source_column)

        return differences, unified


def reconcile(source: Table, compare: Table, mapping: ColumnMapping,
              settings: ComparisonSettings,
              key_columns: Optional[Sequence[str]] = None) -> List[ComparisonRow]:
    """
    Reconcile two tables and return the classified rows.

    Convenience wrapper around Reconciler for callers that only need rows.
    """
    return Reconciler(settings).reconcile(source, compare, mapping, key_columns).rows
