"""
Unit tests for join key construction.
"""

from csvcompare.config.settings import ComparisonSettings
from csvcompare.core.key_builder import JOIN_KEY_SEPARATOR, Side, build_key
from csvcompare.core.models import ColumnMapping


SETTINGS = ComparisonSettings(numeric_precision=2)


class TestBuildKey:
    """Keys from mapped columns."""

    def setup_method(self):
        self.mapping = ColumnMapping.from_pairs([("id", "ID"), ("amt", "Amount")])

    def test_source_side_uses_source_columns(self):
        record = {"id": "1", "amt": "10.00", "note": "ignored"}
        assert build_key(record, self.mapping, Side.SOURCE, SETTINGS) == "1|10"

    def test_compare_side_uses_compare_columns(self):
        record = {"ID": "1.0", "Amount": "$10"}
        assert build_key(record, self.mapping, Side.COMPARE, SETTINGS) == "1|10"

    def test_equivalent_records_share_a_key(self):
        source = {"id": "A-7", "amt": "1,234.004"}
        compare = {"ID": "a-7 ", "Amount": "$1234"}
        assert (build_key(source, self.mapping, Side.SOURCE, SETTINGS)
                == build_key(compare, self.mapping, Side.COMPARE, SETTINGS))

    def test_absent_column_is_empty(self):
        assert build_key({"id": "1"}, self.mapping, Side.SOURCE, SETTINGS) == "1|"

    def test_mapping_order_matters(self):
        reversed_mapping = ColumnMapping.from_pairs([("amt", "Amount"), ("id", "ID")])
        record = {"id": "1", "amt": "2"}
        assert build_key(record, self.mapping, Side.SOURCE, SETTINGS) == "1|2"
        assert build_key(record, reversed_mapping, Side.SOURCE, SETTINGS) == "2|1"

    def test_settings_change_the_key(self):
        record = {"id": "Key", "amt": "1.234"}
        case_sensitive = ComparisonSettings(numeric_precision=3, ignore_case=False)
        assert build_key(record, self.mapping, Side.SOURCE, SETTINGS) == "key|1.23"
        assert build_key(record, self.mapping, Side.SOURCE, case_sensitive) == "Key|1.234"

    def test_empty_mapping_collapses_to_one_key(self):
        empty = ColumnMapping()
        assert build_key({"id": "1"}, empty, Side.SOURCE, SETTINGS) == ""
        assert build_key({"id": "2"}, empty, Side.SOURCE, SETTINGS) == ""

    def test_separator(self):
        assert JOIN_KEY_SEPARATOR == "|"
