"""
Configuration management.
Single responsibility: load, validate, and save comparison job files.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field

from ..core.models import ColumnMapping
from ..core.results import DEFAULT_PAGE_SIZE, ResultFilter
from ..utils.logger import get_logger
from .settings import ComparisonSettings


logger = get_logger()


class ConfigError(ValueError):
    """Exception raised when a job configuration is malformed."""
    pass


@dataclass
class DatasetConfig:
    """Configuration for one input table."""

    path: str
    name: str = ""
    sheet: Union[int, str] = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.path:
            raise ConfigError("Dataset path is required")
        if not self.name:
            self.name = Path(self.path).stem


@dataclass
class OutputConfig:
    """Where and how to present results."""

    export: Optional[str] = None
    filter: str = "all"
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        try:
            ResultFilter(self.filter)
        except ValueError:
            raise ConfigError(f"Unknown result filter: {self.filter}")
        if self.page_size < 1:
            raise ConfigError("page_size must be >= 1")


@dataclass
class JobConfig:
    """A complete comparison job."""

    source: DatasetConfig
    compare: DatasetConfig
    mapping: ColumnMapping = field(default_factory=ColumnMapping)
    settings: ComparisonSettings = field(default_factory=ComparisonSettings)
    output: OutputConfig = field(default_factory=OutputConfig)
    key_columns: List[str] = field(default_factory=list)
    auto_map: bool = False


class ConfigManager:
    """
    Manage comparison job configuration.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path) if config_path else Path("compare.yaml")
        self.config: Dict[str, Any] = {}
        self.job: Optional[JobConfig] = None

    def load(self) -> JobConfig:
        """
        Load configuration from file.

        Returns:
            Parsed job configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If config content is invalid
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config not found: {self.config_path}")

        logger.info("config.loading", file=str(self.config_path))

        with open(self.config_path, encoding="utf-8") as f:
            try:
                self.config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                logger.error("config.invalid_yaml", error=str(e))
                raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(self.config, dict):
            raise ConfigError("Config root must be a mapping")

        self.job = self.parse(self.config)

        logger.info("config.loaded",
                   source=self.job.source.path,
                   compare=self.job.compare.path,
                   mapped_columns=len(self.job.mapping))

        return self.job

    @classmethod
    def parse(cls, config: Dict[str, Any]) -> JobConfig:
        """
        Build a JobConfig from a loaded mapping.

        Raises:
            ConfigError: If a section is missing or malformed
        """
        try:
            return JobConfig(
                source=cls._parse_dataset(config, "source"),
                compare=cls._parse_dataset(config, "compare"),
                mapping=cls._parse_mapping(config.get("mapping") or []),
                settings=ComparisonSettings.from_dict(config.get("settings") or {}),
                output=OutputConfig(**(config.get("output") or {})),
                key_columns=cls._parse_key_columns(config.get("key_columns")),
                auto_map=bool(config.get("auto_map", False)),
            )
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            logger.error("config.job.invalid", error=str(e))
            raise ConfigError(f"Invalid job configuration: {e}") from e

    @staticmethod
    def _parse_dataset(config: Dict[str, Any], section: str) -> DatasetConfig:
        """Parse a source or compare section; a bare string is a path."""
        cfg = config.get(section)
        if cfg is None:
            logger.error("config.dataset.missing", section=section)
            raise ConfigError(f"Missing '{section}' section")

        if isinstance(cfg, str):
            cfg = {"path": cfg}
        if not isinstance(cfg, dict):
            raise ConfigError(f"'{section}' must be a path or a mapping")

        try:
            return DatasetConfig(
                path=cfg.get("path", ""),
                name=cfg.get("name", ""),
                sheet=cfg.get("sheet", 0),
            )
        except Exception as e:
            logger.error("config.dataset.invalid",
                        dataset=section,
                        error=str(e))
            raise

    @staticmethod
    def _parse_mapping(entries) -> ColumnMapping:
        """
        Parse mapping entries.

        Accepts {source, compare} dicts (camelCase sourceColumn/compareColumn
        too) or "SOURCE=COMPARE" strings.
        """
        mapping = ColumnMapping()
        for entry in entries:
            if isinstance(entry, str):
                source_column, _, compare_column = entry.partition("=")
                compare_column = compare_column or source_column
            elif isinstance(entry, dict):
                source_column = entry.get("source", entry.get("sourceColumn"))
                compare_column = entry.get("compare", entry.get("compareColumn"))
            else:
                source_column = compare_column = None

            if not source_column or not compare_column:
                logger.error("config.mapping.invalid", entry=entry)
                raise ConfigError(f"Invalid mapping entry: {entry!r}")

            mapping.set(str(source_column), str(compare_column))
        return mapping

    @staticmethod
    def _parse_key_columns(value) -> List[str]:
        """A single name or a list of names."""
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
            raise ConfigError(f"key_columns must be a list of column names, got {value!r}")
        return list(value)

    def save(self, path: Optional[Path] = None):
        """
        Save configuration to file.

        Args:
            path: Output path (uses original path if not specified)
        """
        if self.job is None:
            raise ConfigError("Nothing to save: no job loaded")

        output_path = Path(path) if path else self.config_path

        logger.info("config.saving", file=str(output_path))

        with open(output_path, 'w', encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(self.job), f,
                           default_flow_style=False, sort_keys=False)

    @staticmethod
    def to_dict(job: JobConfig) -> Dict[str, Any]:
        """Convert a job back into plain YAML-friendly data."""
        return {
            "source": {"path": job.source.path, "name": job.source.name,
                       "sheet": job.source.sheet},
            "compare": {"path": job.compare.path, "name": job.compare.name,
                        "sheet": job.compare.sheet},
            "mapping": [{"source": e.source_column, "compare": e.compare_column}
                        for e in job.mapping],
            "settings": job.settings.to_dict(),
            "output": {
                "export": job.output.export,
                "filter": job.output.filter,
                "page": job.output.page,
                "page_size": job.output.page_size,
            },
            "key_columns": list(job.key_columns),
            "auto_map": job.auto_map,
        }


SAMPLE_CONFIG = """# CSV Comparator job
# ==================

source:
  path: "data/source.csv"

compare:
  path: "data/compare.csv"
  # sheet: 0          # sheet index or name for Excel files

# Column pairs to compare, in order.
mapping:
  - {source: "id", compare: "ID"}
  - {source: "amount", compare: "Total Amount"}

# Source columns that identify a record. Empty means every mapped column.
key_columns: ["id"]

# Set to true to fill the mapping from matching header names
auto_map: false

settings:
  numeric_precision: 2    # decimal places; 1.004 and 1.0 are equal at 2
  ignore_case: true
  trim_whitespace: true

output:
  export: null            # e.g. "reports/results.csv" or ".parquet"
  filter: "all"           # all | match | different | missing
  page: 1
  page_size: 25
"""


def create_sample_config(output_path: Path) -> Path:
    """
    Create a sample configuration file.

    Args:
        output_path: Where to save the config
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    logger.info("config.sample_created", file=str(output_path))
    return output_path
