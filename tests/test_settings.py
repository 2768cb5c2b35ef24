"""Tests for persisted settings."""

import json
import os

import pytest

from trimerge.services.settings import (
    ApplicationSettings,
    MergeSettings,
    SettingsManager,
)


class TestSettingsManager:
    def test_defaults_when_missing(self, tmp_path):
        manager = SettingsManager(tmp_path / "settings.json")
        assert manager.settings == ApplicationSettings()

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        manager = SettingsManager(path)
        settings = ApplicationSettings(merge=MergeSettings(strategy="yours", marker_size=9))

        assert manager.save(settings)
        assert SettingsManager(path).load() == settings

    def test_partial_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"merge": {"show_base_in_conflicts": False}}))

        settings = SettingsManager(path).load()

        assert settings.merge.show_base_in_conflicts is False
        assert settings.merge.marker_size == 7
        assert settings.logging.level == "WARNING"

    def test_unknown_and_mistyped_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "merge": {"marker_size": "big", "colour": "red"},
            "logging": {"level": "DEBUG"},
            "ui": {},
        }))

        settings = SettingsManager(path).load()

        assert settings.merge.marker_size == 7
        assert settings.logging.level == "DEBUG"

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert SettingsManager(path).load() == ApplicationSettings()

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        assert SettingsManager(path).load() == ApplicationSettings()

    def test_save_without_settings(self, tmp_path):
        assert not SettingsManager(tmp_path / "settings.json").save()

    def test_reset(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"merge": {"strategy": "mine"}}))
        manager = SettingsManager(path)
        assert manager.settings.merge.strategy == "mine"
        assert manager.reset() == ApplicationSettings()
        assert manager.settings.merge.strategy == "manual"

    @pytest.mark.skipif(os.name == "nt", reason="XDG paths are not used on Windows")
    def test_default_path_uses_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert SettingsManager().settings_path == tmp_path / "trimerge" / "settings.json"
