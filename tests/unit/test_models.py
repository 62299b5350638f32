"""
Unit tests for tables, mappings and result rows.
"""

import pytest

from csvcompare.core.models import (
    CellComparison,
    ColumnMapping,
    ComparisonRow,
    MappingEntry,
    MappingError,
    RowType,
    Table,
)


class TestTable:
    """Record materialization."""

    def test_records_follow_header_order(self):
        table = Table(headers=["b", "a"], rows=[["2", "1"]])
        record = table.record(0)
        assert record == {"b": "2", "a": "1"}
        assert list(record) == ["b", "a"]

    def test_short_rows_are_padded(self):
        table = Table(headers=["a", "b", "c"], rows=[["1"]])
        assert table.record(0) == {"a": "1", "b": "", "c": ""}

    def test_excess_cells_are_ignored(self):
        table = Table(headers=["a"], rows=[["1", "extra", "more"]])
        assert table.record(0) == {"a": "1"}

    def test_none_cells_become_empty(self):
        table = Table(headers=["a", "b"], rows=[[None, "x"]])
        assert table.record(0) == {"a": "", "b": "x"}

    def test_from_records(self):
        table = Table.from_records([{"id": "1", "x": "a"}, {"id": "2", "y": "b"}])
        assert table.headers == ["id", "x", "y"]
        assert table.rows == [["1", "a", ""], ["2", "", "b"]]
        assert len(table) == 2


class TestColumnMapping:
    """Ordered, source-unique mapping."""

    def test_last_write_wins_per_source(self):
        mapping = ColumnMapping.from_pairs([("id", "ID"), ("amt", "A"), ("id", "Key")])
        assert mapping.to_pairs() == [("id", "Key"), ("amt", "A")]

    def test_set_replaces_in_place(self):
        mapping = ColumnMapping.from_pairs([("a", "x"), ("b", "y")])
        mapping.set("a", "z")
        mapping.set("c", "w")
        assert mapping.to_pairs() == [("a", "z"), ("b", "y"), ("c", "w")]

    def test_remove_and_lookup(self):
        mapping = ColumnMapping([MappingEntry("a", "x"), MappingEntry("b", "x")])
        assert mapping.compare_column_for("a") == "x"
        assert mapping.is_compare_mapped("x")
        mapping.remove("a")
        mapping.remove("missing")
        assert mapping.compare_column_for("a") is None
        assert mapping.source_columns == ["b"]
        assert mapping.compare_columns == ["x"]

    def test_equality(self):
        assert ColumnMapping.from_pairs([("a", "b")]) == ColumnMapping.from_pairs([("a", "b")])
        assert ColumnMapping.from_pairs([("a", "b")]) != ColumnMapping.from_pairs([("b", "a")])

    def test_subset_keeps_mapping_order(self):
        mapping = ColumnMapping.from_pairs([("a", "x"), ("b", "y"), ("c", "z")])
        assert mapping.subset(["c", "a"]).to_pairs() == [("a", "x"), ("c", "z")]

    def test_subset_rejects_unmapped_columns(self):
        mapping = ColumnMapping.from_pairs([("a", "x")])
        with pytest.raises(MappingError, match="not mapped: x"):
            mapping.subset(["x"])


class TestComparisonRow:
    """Row variants and serialization."""

    def test_missing_constructors(self):
        left = ComparisonRow.missing_in_compare("1", {"id": "1"})
        right = ComparisonRow.missing_in_source("2", {"id": "2"})
        assert left.row_type is RowType.MISSING_IN_COMPARE
        assert left.compare_data is None
        assert right.row_type is RowType.MISSING_IN_SOURCE
        assert right.source_data is None
        assert left.is_missing and right.is_missing

    def test_to_dict(self):
        row = ComparisonRow(
            row_type=RowType.DIFFERENT,
            key="1",
            source_data={"id": "1", "amt": "5"},
            compare_data={"id": "1", "amt": "6"},
            differences=["amt"],
            unified={"amt": CellComparison("5", "6", True)},
        )
        data = row.to_dict()
        assert data["type"] == "different"
        assert data["differences"] == ["amt"]
        assert data["unified"]["amt"] == {"source": "5", "compare": "6", "is_different": True}
