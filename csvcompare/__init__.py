"""
CSV Comparator - reconcile two tables by mapped columns.
"""

__version__ = "1.0.0"

from .config.settings import ComparisonSettings
from .config.manager import ConfigManager, ConfigError, JobConfig
from .core.models import Table, ColumnMapping, MappingEntry, ComparisonRow, RowType
from .core.reconciler import Reconciler, ReconciliationResult, reconcile
from .core.comparator import values_equal
from .core.key_builder import build_key, Side
from .core.mapping import MappingError, suggest_mapping, validate_mapping
from .utils.normalizers import normalize
from .utils.logger import get_logger

__all__ = [
    "ComparisonSettings",
    "ConfigManager",
    "ConfigError",
    "JobConfig",
    "Table",
    "ColumnMapping",
    "MappingEntry",
    "ComparisonRow",
    "RowType",
    "Reconciler",
    "ReconciliationResult",
    "reconcile",
    "values_equal",
    "build_key",
    "Side",
    "MappingError",
    "suggest_mapping",
    "validate_mapping",
    "normalize",
    "get_logger",
]
