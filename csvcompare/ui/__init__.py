"""Terminal presentation of results."""

from .report import ResultReporter

__all__ = [
    "ResultReporter",
]
