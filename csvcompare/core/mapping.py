"""
Column mapping discovery and validation.
Single responsibility: propose and check source-to-compare column mappings.
"""

from typing import List, Optional, Sequence

from ..utils.logger import get_logger
from .models import ColumnMapping, MappingEntry, MappingError


logger = get_logger()


def _find_compare_match(source_column: str,
                        compare_headers: Sequence[str]) -> Optional[str]:
    source_lower = source_column.lower()

    for compare_column in compare_headers:
        if compare_column.lower() == source_lower:
            return compare_column

    for compare_column in compare_headers:
        compare_lower = compare_column.lower()
        if source_lower in compare_lower or compare_lower in source_lower:
            return compare_column

    return None


def suggest_mapping(source_headers: Sequence[str],
                    compare_headers: Sequence[str]) -> ColumnMapping:
    """
    Propose a mapping from header names.

    For each source header, in order: the first compare header equal to it
    ignoring case, otherwise the first compare header where one lowercased
    name contains the other. Unmatched source headers are left out.

    Args:
        source_headers: Source table headers
        compare_headers: Compare table headers

    Returns:
        Suggested ColumnMapping (possibly empty)
    """
    entries = []
    for source_column in source_headers:
        match = _find_compare_match(source_column, compare_headers)
        if match is not None:
            entries.append(MappingEntry(source_column, match))

    mapping = ColumnMapping(entries)
    logger.info("mapping.suggested",
               mapped=len(mapping),
               unmapped=len(source_headers) - len(mapping))
    logger.debug("mapping.suggested.pairs", pairs=mapping.to_pairs())
    return mapping


def validate_mapping(mapping: ColumnMapping,
                     source_headers: Optional[Sequence[str]] = None,
                     compare_headers: Optional[Sequence[str]] = None,
                     key_columns: Optional[Sequence[str]] = None) -> ColumnMapping:
    """
    Check a mapping before handing it to the reconciler.

    Args:
        mapping: Mapping to check
        source_headers: Optional source headers to check membership against
        compare_headers: Optional compare headers to check membership against
        key_columns: Optional key subset; each must be a mapped source column

    Returns:
        The mapping, unchanged

    Raises:
        MappingError: If the mapping is empty, names unknown columns or
            the key columns are not mapped
    """
    if mapping is None or len(mapping) == 0:
        logger.error("mapping.validation.empty")
        raise MappingError(
            "[MAPPING ERROR] Please map at least one column to proceed with comparison."
        )

    unknown: List[str] = []
    if source_headers is not None:
        unknown += [f"source:{c}" for c in mapping.source_columns if c not in source_headers]
    if compare_headers is not None:
        unknown += [f"compare:{c}" for c in mapping.compare_columns if c not in compare_headers]

    if unknown:
        logger.error("mapping.validation.unknown_columns", columns=unknown)
        raise MappingError(
            f"[MAPPING ERROR] Mapped columns not found: {', '.join(unknown)}. "
            f"Suggestion: Check the header names of both files."
        )

    if key_columns:
        mapping.subset(key_columns)

    return mapping


def parse_mapping_args(pairs: Sequence[str]) -> ColumnMapping:
    """
    Parse "SOURCE=COMPARE" strings; a bare "NAME" maps a column to itself.

    Raises:
        MappingError: If an entry has an empty side
    """
    mapping = ColumnMapping()
    for pair in pairs:
        source_column, sep, compare_column = pair.partition("=")
        if not sep:
            compare_column = source_column
        if not source_column or not compare_column:
            raise MappingError(f"[MAPPING ERROR] Invalid mapping entry: {pair!r}")
        mapping.set(source_column, compare_column)
    return mapping
