"""
Join key construction.
Single responsibility: project a record through the mapping into a join key.
"""

from enum import Enum

from ..config.settings import ComparisonSettings
from .comparator import normalize_cell
from .models import ColumnMapping, Record


JOIN_KEY_SEPARATOR = "|"


class Side(str, Enum):
    """Which table a record comes from."""

    SOURCE = "source"
    COMPARE = "compare"


def key_column(entry, side: Side) -> str:
    """Column name a mapping entry refers to on the given side."""
    return entry.source_column if side is Side.SOURCE else entry.compare_column


def build_key(record: Record, mapping: ColumnMapping, side: Side,
              settings: ComparisonSettings) -> str:
    """
    Build the canonical join key for a record.

    Mapped values are normalized in mapping order and joined with "|".
    Columns missing from the record count as empty. An empty mapping gives
    every record the key "", so callers must reject empty mappings first.

    Args:
        record: Header-ordered record
        mapping: Column mapping (order matters)
        side: Side.SOURCE or Side.COMPARE
        settings: Run settings, identical for both tables

    Returns:
        Join key string
    """
    parts = []
    for entry in mapping:
        value = record.get(key_column(entry, side), "")
        parts.append(normalize_cell(value, settings).text)
    return JOIN_KEY_SEPARATOR.join(parts)
