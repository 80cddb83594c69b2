"""Tests for settings loading."""

import json
import logging

import pytest
from pydantic import ValidationError

from nodesweep.config import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE, Settings, config_path, load_settings


class TestConfigPath:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.json"))
        assert config_path() == tmp_path / "custom.json"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_path() == DEFAULT_CONFIG_FILE


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.max_depth is None
        assert settings.exclude == []
        assert settings.workers is None

    def test_rejects_invalid_values(self):
        with pytest.raises(ValidationError):
            Settings(workers=0)
        with pytest.raises(ValidationError):
            Settings(max_depth=-2)


class TestLoadSettings:
    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_settings(tmp_path / "missing.json") == Settings()

    def test_loads_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_depth": 4, "exclude": ["/a", "/b"], "workers": 2}))

        settings = load_settings(path)

        assert settings.max_depth == 4
        assert settings.exclude == ["/a", "/b"]
        assert settings.workers == 2

    def test_partial_file_merges_with_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"workers": 3}))

        settings = load_settings(path)

        assert settings.workers == 3
        assert settings.exclude == []

    def test_uses_env_path_by_default(self, isolated_config):
        isolated_config.write_text(json.dumps({"max_depth": 1}))
        assert load_settings().max_depth == 1

    @pytest.mark.parametrize(
        "content",
        ["{broken", json.dumps({"workers": "many"}), json.dumps({"max_depth": -1})],
    )
    def test_invalid_file_warns_and_returns_defaults(self, tmp_path, caplog, content):
        path = tmp_path / "config.json"
        path.write_text(content)

        with caplog.at_level(logging.WARNING, logger="nodesweep"):
            settings = load_settings(path)

        assert settings == Settings()
        assert "Ignoring invalid config file" in caplog.text

    def test_path_is_directory(self, tmp_path):
        assert load_settings(tmp_path) == Settings()

    def test_non_utf8_file_warns_and_returns_defaults(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_bytes(b'{"exclude": ["\xff\xfe"]}')

        with caplog.at_level(logging.WARNING, logger="nodesweep"):
            settings = load_settings(path)

        assert settings == Settings()
        assert "Ignoring invalid config file" in caplog.text
