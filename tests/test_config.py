"""
Tests for SelectorConfig and the querytree.json loader.
"""

import json
import os

import pytest

from querytree import SelectorConfig
from querytree.config_loader import ConfigLoader


class TestSelectorConfig:

    def test_defaults(self):
        config = SelectorConfig()
        assert config.highlight_name == "ident"
        assert config.highlight_value == "pm"
        assert config.strict_kinds is False

    def test_default_highlight(self):
        assert SelectorConfig().default_highlight() == [
            {"Terminal": {"name": "ident", "value": "pm"}}
        ]

    def test_default_highlight_is_fresh(self):
        config = SelectorConfig()
        config.default_highlight()[0]["Terminal"]["value"] = "changed"
        assert config.default_highlight()[0]["Terminal"]["value"] == "pm"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("QUERYTREE_HIGHLIGHT_NAME", "path")
        monkeypatch.setenv("QUERYTREE_HIGHLIGHT_VALUE", "src")
        monkeypatch.setenv("QUERYTREE_STRICT_KINDS", "TRUE")
        config = SelectorConfig()
        assert (config.highlight_name, config.highlight_value, config.strict_kinds) == ("path", "src", True)

    @pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("false", False), ("0", False)])
    def test_strict_kinds_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("QUERYTREE_STRICT_KINDS", value)
        assert SelectorConfig().strict_kinds is expected

    def test_explicit_values_beat_environment(self, monkeypatch):
        monkeypatch.setenv("QUERYTREE_HIGHLIGHT_VALUE", "src")
        assert SelectorConfig(highlight_value="main").highlight_value == "main"


class TestConfigLoader:

    def write_config(self, directory, data):
        (directory / "querytree.json").write_text(json.dumps(data), encoding="utf-8")

    def test_loads_and_exports_to_environment(self, tmp_path):
        self.write_config(tmp_path, {"highlight_value": "main", "strict_kinds": True})
        loader = ConfigLoader()
        assert loader.load(tmp_path) is True
        assert loader.config_path == tmp_path / "querytree.json"
        assert os.environ["QUERYTREE_HIGHLIGHT_VALUE"] == "main"
        assert os.environ["QUERYTREE_STRICT_KINDS"] == "true"

        config = SelectorConfig()
        assert config.highlight_value == "main"
        assert config.strict_kinds is True

    def test_environment_wins_over_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QUERYTREE_HIGHLIGHT_VALUE", "from-env")
        self.write_config(tmp_path, {"highlight_value": "from-file"})
        ConfigLoader().load(tmp_path)
        assert SelectorConfig().highlight_value == "from-env"

    def test_project_root_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QUERYTREE_PROJECT_ROOT", str(tmp_path))
        self.write_config(tmp_path, {"highlight_name": "path"})
        assert ConfigLoader().load() is True
        assert SelectorConfig().highlight_name == "path"

    def test_missing_file(self, tmp_path):
        loader = ConfigLoader()
        assert loader.load(tmp_path) is False
        assert loader.config_path is None
        assert loader.config == {}

    def test_invalid_json(self, tmp_path):
        (tmp_path / "querytree.json").write_text("{not json", encoding="utf-8")
        loader = ConfigLoader()
        assert loader.load(tmp_path) is False
        assert "QUERYTREE_HIGHLIGHT_VALUE" not in os.environ

    def test_loads_only_once(self, tmp_path):
        loader = ConfigLoader()
        assert loader.load(tmp_path) is False
        self.write_config(tmp_path, {"highlight_value": "late"})
        assert loader.load(tmp_path) is False

    def test_unknown_keys_are_kept_but_not_exported(self, tmp_path):
        self.write_config(tmp_path, {"comment": "hello"})
        loader = ConfigLoader()
        loader.load(tmp_path)
        assert loader.get("comment") == "hello"
        assert loader.get("missing", 3) == 3
