"""Tests for discovery settings."""

import json
import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from spilib.core.errors.errors import SettingsError
from spilib.core.settings.settings import (
    DEFAULT_RESOURCE_PREFIX,
    SpiSettings,
    get_settings,
    load_settings,
    set_settings,
)


class TestSpiSettings:
    """Test SpiSettings configuration class."""

    def test_default_configuration_values(self):
        settings = SpiSettings()

        assert settings.resource_prefix == DEFAULT_RESOURCE_PREFIX
        assert settings.search_path == ""
        assert settings.search_paths == []
        assert settings.include_sys_path is True
        assert settings.encoding == "utf-8"

    def test_environment_variable_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SPILIB_RESOURCE_PREFIX", "plugins")
        monkeypatch.setenv("SPILIB_INCLUDE_SYS_PATH", "false")
        monkeypatch.setenv("SPILIB_SEARCH_PATH", os.pathsep.join([str(tmp_path / "a"), str(tmp_path / "b")]))

        settings = SpiSettings()

        assert settings.resource_prefix == "plugins"
        assert settings.include_sys_path is False
        assert settings.search_paths == [tmp_path / "a", tmp_path / "b"]

    def test_unprefixed_environment_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("ENCODING", "latin-1")
        monkeypatch.setenv("SEARCH_PATH", "/elsewhere")
        monkeypatch.setenv("RESOURCE_PREFIX", "other")

        settings = SpiSettings()

        assert settings.encoding == "utf-8"
        assert settings.search_path == ""
        assert settings.resource_prefix == DEFAULT_RESOURCE_PREFIX

    def test_keyword_arguments(self):
        settings = SpiSettings(resource_prefix="/custom/services/", encoding="latin-1")

        assert settings.resource_prefix == "custom/services"
        assert settings.encoding == "latin-1"

    def test_search_paths_skip_blank_entries(self):
        settings = SpiSettings(search_path=f"one{os.pathsep}{os.pathsep} {os.pathsep}two")

        assert settings.search_paths == [Path("one"), Path("two")]

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValidationError):
            SpiSettings(resource_prefix="//")

    def test_unknown_encoding_rejected(self):
        with pytest.raises(ValidationError):
            SpiSettings(encoding="no-such-codec")


class TestLoadSettings:
    """Test loading settings from files."""

    def test_load_yaml(self, tmp_path):
        config_file = tmp_path / "spilib.yaml"
        config_file.write_text(yaml.safe_dump({"resource_prefix": "plugins", "include_sys_path": False}))

        settings = load_settings(config_file)

        assert settings.resource_prefix == "plugins"
        assert settings.include_sys_path is False

    def test_load_json(self, tmp_path):
        config_file = tmp_path / "spilib.json"
        config_file.write_text(json.dumps({"encoding": "utf-16"}))

        settings = load_settings(config_file)

        assert settings.encoding == "utf-16"

    def test_overrides_take_precedence(self, tmp_path):
        config_file = tmp_path / "spilib.yml"
        config_file.write_text("resource_prefix: plugins\n")

        settings = load_settings(config_file, resource_prefix="other")

        assert settings.resource_prefix == "other"

    def test_empty_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "spilib.yaml"
        config_file.write_text("")

        settings = load_settings(config_file)

        assert settings.resource_prefix == DEFAULT_RESOURCE_PREFIX

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="Failed to read settings file"):
            load_settings(tmp_path / "missing.yaml")

    def test_non_mapping_file(self, tmp_path):
        config_file = tmp_path / "spilib.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(SettingsError, match="must contain a mapping"):
            load_settings(config_file)

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / "spilib.yaml"
        config_file.write_text("encoding: no-such-codec\n")

        with pytest.raises(SettingsError, match="Invalid settings") as exc_info:
            load_settings(config_file)
        assert isinstance(exc_info.value.cause, ValidationError)


class TestGlobalSettings:
    """Test the process-wide settings accessors."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_get_settings_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SPILIB_RESOURCE_PREFIX", "from-env")

        assert get_settings().resource_prefix == "from-env"

    def test_set_settings(self):
        custom = SpiSettings(resource_prefix="custom")
        set_settings(custom)

        assert get_settings() is custom

        set_settings(None)
        assert get_settings() is not custom
