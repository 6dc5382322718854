"""Tests for settings and YAML loading."""

import pytest
import yaml

from cell_lab.biology import BloodCell, BrainCell
from cell_lab.config import defaults
from cell_lab.config.loader import (
    load_settings_from_yaml,
    load_templates_from_yaml,
    load_yaml_config,
)
from cell_lab.config.settings import CellLabSettings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in (
            "CELL_LAB_LOG_LEVEL",
            "CELL_LAB_TEMPLATES_PATH",
            "CELL_LAB_ID_SEED",
            "CELL_LAB_ASSIST_GROWTH",
            "CELL_LAB_EXPERIMENT_ROUNDS",
        ):
            monkeypatch.delenv(name, raising=False)
        settings = CellLabSettings.load_from_env()
        assert settings.log_level == defaults.DEFAULT_LOG_LEVEL
        assert settings.templates_path is None
        assert settings.id_seed is None
        assert settings.assist_growth is True
        assert settings.experiment_rounds == 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CELL_LAB_LOG_LEVEL", "debug")
        monkeypatch.setenv("CELL_LAB_TEMPLATES_PATH", "/tmp/t.yaml")
        monkeypatch.setenv("CELL_LAB_ID_SEED", "42")
        monkeypatch.setenv("CELL_LAB_ASSIST_GROWTH", "false")
        monkeypatch.setenv("CELL_LAB_EXPERIMENT_ROUNDS", "3")
        settings = CellLabSettings.load_from_env()
        assert settings.log_level == "DEBUG"
        assert settings.templates_path == "/tmp/t.yaml"
        assert settings.id_seed == 42
        assert settings.assist_growth is False
        assert settings.experiment_rounds == 3


class TestYamlLoading:

    def test_missing_file_is_empty(self, tmp_path):
        assert load_yaml_config(str(tmp_path / "nope.yaml")) == {}

    def test_settings_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"id_seed": 7, "assist_growth": False, "unrelated": 1}))
        settings = load_settings_from_yaml(str(path))
        assert settings.id_seed == 7
        assert settings.assist_growth is False
        assert settings.log_level == defaults.DEFAULT_LOG_LEVEL

    def test_templates_from_yaml(self, tmp_path, id_factory):
        path = tmp_path / "templates.yaml"
        path.write_text(
            "templates:\n"
            "  runner:\n"
            "    kind: blood\n"
            "    genetic_code: HUMAN_DNA\n"
            "    oxygen_level: 90\n"
            "  scholar:\n"
            "    kind: brain\n"
            "    genetic_code: HUMAN_DNA\n"
            "    knowledge: [latin, greek]\n"
        )
        templates = load_templates_from_yaml(str(path), id_factory=id_factory)
        assert list(templates) == ["runner", "scholar"]
        assert isinstance(templates["runner"], BloodCell)
        assert templates["runner"].oxygen_level == 90
        assert isinstance(templates["scholar"], BrainCell)
        assert templates["scholar"].get_knowledge() == ["latin", "greek"]

    def test_templates_section_must_be_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("templates:\n  - basic\n")
        with pytest.raises(ValueError):
            load_templates_from_yaml(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_yaml_config(str(path))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("templates: [unclosed\n")
        with pytest.raises(ValueError, match="Could not parse"):
            load_yaml_config(str(path))

    def test_invalid_definition(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("templates:\n  odd:\n    kind: liver\n    genetic_code: X\n")
        with pytest.raises(ValueError, match="Unknown cell kind"):
            load_templates_from_yaml(str(path))
