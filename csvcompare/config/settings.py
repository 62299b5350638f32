"""
Comparison settings.
Single responsibility: hold the immutable tolerance options for one run.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict


TRUE_STRINGS = {"true", "yes", "on", "1"}
FALSE_STRINGS = {"false", "no", "off", "0"}


def parse_flag(value: Any) -> bool:
    """
    Read a yes/no setting.

    Accepts booleans and the usual string spellings ("true", "no", ...),
    since quoted YAML values arrive as strings.

    Raises:
        ValueError: For anything else
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError(f"Expected true or false, got {value!r}")


@dataclass(frozen=True)
class ComparisonSettings:
    """
    Tolerance options for a single reconciliation run.

    Passed explicitly to every engine call; keys and cell comparisons are
    only comparable when built from the same settings instance.
    """

    numeric_precision: int = 2
    ignore_case: bool = True
    trim_whitespace: bool = True

    def __post_init__(self):
        """Validate settings after initialization."""
        if isinstance(self.numeric_precision, bool) or not isinstance(self.numeric_precision, int):
            raise ValueError(
                f"numeric_precision must be an integer, got {self.numeric_precision!r}"
            )
        if self.numeric_precision < 0:
            raise ValueError("numeric_precision must be >= 0")
        for name in ("ignore_case", "trim_whitespace"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false, got {getattr(self, name)!r}")

    @property
    def tolerance(self):
        """Smallest numeric gap treated as a difference."""
        return Decimal(1).scaleb(-self.numeric_precision)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComparisonSettings":
        """
        Build settings from a config mapping.

        Accepts snake_case keys and the camelCase keys used by the web
        front end (numericPrecision, ignoreCase, trimWhitespace).
        """
        data = data or {}
        defaults = cls()

        def pick(snake: str, camel: str, default):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            numeric_precision=pick("numeric_precision", "numericPrecision",
                                   defaults.numeric_precision),
            ignore_case=parse_flag(pick("ignore_case", "ignoreCase", defaults.ignore_case)),
            trim_whitespace=parse_flag(pick("trim_whitespace", "trimWhitespace",
                                            defaults.trim_whitespace)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
