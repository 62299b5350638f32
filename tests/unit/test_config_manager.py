"""
Unit tests for comparison settings and job configuration files.
"""

from decimal import Decimal

import pytest
import yaml

from csvcompare.config import (
    ComparisonSettings,
    ConfigError,
    ConfigManager,
    JobConfig,
    create_sample_config,
)
from csvcompare.core.models import ColumnMapping


class TestComparisonSettings:
    """Settings validation and loading."""

    def test_defaults(self):
        settings = ComparisonSettings()
        assert settings.numeric_precision == 2
        assert settings.ignore_case is True
        assert settings.trim_whitespace is True

    def test_tolerance(self):
        assert ComparisonSettings(numeric_precision=2).tolerance == Decimal("0.01")
        assert ComparisonSettings(numeric_precision=0).tolerance == Decimal("1")

    @pytest.mark.parametrize("precision", [-1, 1.5, "2", True])
    def test_invalid_precision(self, precision):
        with pytest.raises(ValueError):
            ComparisonSettings(numeric_precision=precision)

    def test_frozen(self):
        settings = ComparisonSettings()
        with pytest.raises(AttributeError):
            settings.numeric_precision = 3

    def test_from_dict_snake_case(self):
        settings = ComparisonSettings.from_dict({"numeric_precision": 4, "ignore_case": False})
        assert settings == ComparisonSettings(4, False, True)

    def test_from_dict_camel_case(self):
        settings = ComparisonSettings.from_dict(
            {"numericPrecision": 0, "ignoreCase": True, "trimWhitespace": False}
        )
        assert settings == ComparisonSettings(0, True, False)

    @pytest.mark.parametrize("raw,expected", [
        ("false", False), ("False", False), ("no", False), ("0", False),
        ("true", True), ("YES", True), (" on ", True), (True, True), (False, False),
    ])
    def test_from_dict_flag_spellings(self, raw, expected):
        settings = ComparisonSettings.from_dict({"ignore_case": raw, "trimWhitespace": raw})
        assert settings.ignore_case is expected
        assert settings.trim_whitespace is expected

    @pytest.mark.parametrize("raw", ["maybe", 1, None, ""])
    def test_from_dict_rejects_other_flags(self, raw):
        with pytest.raises(ValueError):
            ComparisonSettings.from_dict({"ignore_case": raw})

    def test_non_bool_flag(self):
        with pytest.raises(ValueError):
            ComparisonSettings(ignore_case="false")

    def test_round_trip(self):
        settings = ComparisonSettings(3, False, False)
        assert ComparisonSettings.from_dict(settings.to_dict()) == settings


class TestConfigManager:
    """YAML job files."""

    def write(self, tmp_path, data):
        path = tmp_path / "job.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path

    def test_load_full_job(self, tmp_path):
        path = self.write(tmp_path, {
            "source": {"path": "a.csv", "name": "Ledger"},
            "compare": "b.xlsx",
            "mapping": [
                {"source": "id", "compare": "ID"},
                {"sourceColumn": "amt", "compareColumn": "Amount"},
                "note=Comment",
            ],
            "key_columns": ["id"],
            "settings": {"numeric_precision": 3},
            "output": {"filter": "different", "page_size": 10},
        })

        job = ConfigManager(path).load()

        assert job.source.path == "a.csv"
        assert job.source.name == "Ledger"
        assert job.compare.path == "b.xlsx"
        assert job.compare.name == "b"
        assert job.mapping.to_pairs() == [("id", "ID"), ("amt", "Amount"),
                                          ("note", "Comment")]
        assert job.key_columns == ["id"]
        assert job.settings.numeric_precision == 3
        assert job.output.filter == "different"
        assert job.output.page_size == 10
        assert job.auto_map is False

    def test_defaults(self, tmp_path):
        job = ConfigManager(self.write(tmp_path, {"source": "a.csv", "compare": "b.csv"})).load()
        assert len(job.mapping) == 0
        assert job.key_columns == []
        assert job.settings == ComparisonSettings()
        assert job.output.filter == "all"
        assert job.output.page_size == 25

    def test_quoted_false_in_yaml(self, tmp_path):
        path = tmp_path / "job.yaml"
        path.write_text(
            'source: a.csv\ncompare: b.csv\n'
            'settings:\n  ignore_case: "false"\n  trim_whitespace: "no"\n',
            encoding="utf-8",
        )
        job = ConfigManager(path).load()
        assert job.settings.ignore_case is False
        assert job.settings.trim_whitespace is False

    def test_unreadable_flag_in_yaml(self):
        with pytest.raises(ConfigError):
            ConfigManager.parse({"source": "a.csv", "compare": "b.csv",
                                 "settings": {"ignore_case": "sometimes"}})

    def test_single_key_column_string(self):
        job = ConfigManager.parse({"source": "a.csv", "compare": "b.csv", "key_columns": "id"})
        assert job.key_columns == ["id"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "nope.yaml").load()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("source: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigManager(path).load()

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigManager(path).load()

    @pytest.mark.parametrize("config", [
        {"compare": "b.csv"},
        {"source": "a.csv"},
        {"source": 5, "compare": "b.csv"},
        {"source": {"name": "x"}, "compare": "b.csv"},
        {"source": "a.csv", "compare": "b.csv", "mapping": [{"source": "id"}]},
        {"source": "a.csv", "compare": "b.csv", "mapping": [7]},
        {"source": "a.csv", "compare": "b.csv", "settings": {"numeric_precision": -1}},
        {"source": "a.csv", "compare": "b.csv", "output": {"filter": "bogus"}},
        {"source": "a.csv", "compare": "b.csv", "output": {"page_size": 0}},
        {"source": "a.csv", "compare": "b.csv", "output": {"colour": "red"}},
        {"source": "a.csv", "compare": "b.csv", "key_columns": [1]},
    ])
    def test_invalid_sections(self, config):
        with pytest.raises(ConfigError):
            ConfigManager.parse(config)

    def test_save_and_reload(self, tmp_path):
        manager = ConfigManager()
        manager.job = JobConfig(
            source=ConfigManager.parse({"source": "a.csv", "compare": "b.csv"}).source,
            compare=ConfigManager.parse({"source": "a.csv", "compare": "b.csv"}).compare,
            mapping=ColumnMapping.from_pairs([("id", "ID")]),
            settings=ComparisonSettings(1, False, True),
            key_columns=["id"],
        )
        path = tmp_path / "saved.yaml"
        manager.save(path)

        reloaded = ConfigManager(path).load()
        assert reloaded.mapping == manager.job.mapping
        assert reloaded.settings == manager.job.settings
        assert reloaded.key_columns == ["id"]
        assert reloaded.source.path == "a.csv"

    def test_save_without_job(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigManager().save(tmp_path / "x.yaml")

    def test_sample_config_loads(self, tmp_path):
        path = create_sample_config(tmp_path / "configs" / "sample.yaml")
        job = ConfigManager(path).load()
        assert job.mapping.to_pairs() == [("id", "ID"), ("amount", "Total Amount")]
        assert job.key_columns == ["id"]
        assert job.output.export is None
