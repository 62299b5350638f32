"""
Data model for table reconciliation.
Single responsibility: describe tables, column mappings and result rows.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


Record = Dict[str, str]


class MappingError(ValueError):
    """Exception raised when a column mapping cannot be used for a run."""
    pass


@dataclass
class Table:
    """
    Parsed rectangular table of string cells.

    Rows shorter than the header are padded with empty strings when
    materialized; cells beyond the header count are ignored.
    """

    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    name: str = ""

    def __len__(self) -> int:
        return len(self.rows)

    def record(self, index: int) -> Record:
        """Materialize one row as a header-ordered record."""
        return self._to_record(self.rows[index])

    def records(self) -> Iterator[Record]:
        """Iterate rows as records in table order."""
        for row in self.rows:
            yield self._to_record(row)

    def _to_record(self, row: Sequence[Optional[str]]) -> Record:
        record: Record = {}
        for index, header in enumerate(self.headers):
            value = row[index] if index < len(row) else ""
            record[header] = value if value is not None else ""
        return record

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, str]],
                     headers: Optional[List[str]] = None,
                     name: str = "") -> "Table":
        """
        Build a table from dictionaries.

        Headers default to the keys in first-seen order across all records.
        """
        records = list(records)
        if headers is None:
            headers = []
            for rec in records:
                for key in rec:
                    if key not in headers:
                        headers.append(key)
        rows = [[rec.get(h, "") for h in headers] for rec in records]
        return cls(headers=list(headers), rows=rows, name=name)


@dataclass(frozen=True)
class MappingEntry:
    """One source column paired with one compare column."""

    source_column: str
    compare_column: str


class ColumnMapping:
    """
    Ordered source-to-compare column pairs.

    Each source column appears at most once; assigning it again replaces
    the compare column in place so iteration order is stable. Compare
    columns may be reused by several source columns.
    """

    def __init__(self, entries: Optional[Iterable[MappingEntry]] = None):
        self._entries: Dict[str, MappingEntry] = {}
        for entry in entries or []:
            self._entries[entry.source_column] = entry

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "ColumnMapping":
        """Build from (source, compare) tuples, last write wins per source."""
        return cls(MappingEntry(src, cmp) for src, cmp in pairs)

    def set(self, source_column: str, compare_column: str):
        self._entries[source_column] = MappingEntry(source_column, compare_column)

    def remove(self, source_column: str):
        self._entries.pop(source_column, None)

    def compare_column_for(self, source_column: str) -> Optional[str]:
        entry = self._entries.get(source_column)
        return entry.compare_column if entry else None

    def is_compare_mapped(self, compare_column: str) -> bool:
        return any(e.compare_column == compare_column for e in self._entries.values())

    @property
    def source_columns(self) -> List[str]:
        return [e.source_column for e in self]

    @property
    def compare_columns(self) -> List[str]:
        return [e.compare_column for e in self]

    def subset(self, source_columns: Iterable[str]) -> "ColumnMapping":
        """
        Entries for the given source columns, in this mapping's order.

        Raises:
            MappingError: If a column is not mapped
        """
        wanted = list(source_columns)
        unknown = [c for c in wanted if c not in self._entries]
        if unknown:
            raise MappingError(
                f"[MAPPING ERROR] Key columns are not mapped: {', '.join(unknown)}"
            )
        return ColumnMapping(e for e in self if e.source_column in wanted)

    def to_pairs(self) -> List[Tuple[str, str]]:
        return [(e.source_column, e.compare_column) for e in self]

    def __iter__(self) -> Iterator[MappingEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColumnMapping):
            return NotImplemented
        return self.to_pairs() == other.to_pairs()

    def __repr__(self) -> str:
        pairs = ", ".join(f"{s}->{c}" for s, c in self.to_pairs())
        return f"ColumnMapping([{pairs}])"


class RowType(str, Enum):
    """Classification of one logical record."""

    MATCH = "match"
    DIFFERENT = "different"
    MISSING_IN_COMPARE = "missing-in-compare"
    MISSING_IN_SOURCE = "missing-in-source"


@dataclass(frozen=True)
class CellComparison:
    """Side-by-side view of one mapped column."""

    source_value: str
    compare_value: str
    is_different: bool


@dataclass
class ComparisonRow:
    """
    One classified record.

    MATCH and DIFFERENT rows carry both records and a per-column unified
    view keyed by source column; missing rows carry only the side that
    exists.
    """

    row_type: RowType
    key: str
    source_data: Optional[Record] = None
    compare_data: Optional[Record] = None
    differences: List[str] = field(default_factory=list)
    unified: Dict[str, CellComparison] = field(default_factory=dict)

    @classmethod
    def missing_in_compare(cls, key: str, source_data: Record) -> "ComparisonRow":
        return cls(RowType.MISSING_IN_COMPARE, key, source_data=source_data)

    @classmethod
    def missing_in_source(cls, key: str, compare_data: Record) -> "ComparisonRow":
        return cls(RowType.MISSING_IN_SOURCE, key, compare_data=compare_data)

    @property
    def is_match(self) -> bool:
        return self.row_type is RowType.MATCH

    @property
    def is_missing(self) -> bool:
        return self.row_type in (RowType.MISSING_IN_COMPARE, RowType.MISSING_IN_SOURCE)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        data = {
            "type": self.row_type.value,
            "key": self.key,
            "source_data": self.source_data,
            "compare_data": self.compare_data,
        }
        if self.differences:
            data["differences"] = list(self.differences)
        if self.unified:
            data["unified"] = {
                col: {
                    "source": cell.source_value,
                    "compare": cell.compare_value,
                    "is_different": cell.is_different,
                }
                for col, cell in self.unified.items()
            }
        return data
