"""Tests for YAML settings and environment overrides."""
from pathlib import Path

import pytest

from kubenv.config import Settings, load_settings
from kubenv.errors import SettingsError


class TestLoadSettings:
    """Tests for load_settings."""

    @pytest.fixture
    def settings_file(self, tmp_path):
        path = tmp_path / "kubenv.yaml"
        path.write_text(
            """
dir: /srv/kubenv/profiles
kube_dir: ~/.kube
index_active: true
log_level: debug
audit_log: /var/log/kubenv/audit.log
"""
        )
        return path

    def test_defaults_without_file(self):
        settings = load_settings()

        assert settings == Settings()
        assert settings.dir is None
        assert settings.log_level == "WARNING"

    def test_load_explicit_file(self, settings_file, isolated_env):
        settings = load_settings(settings_file)

        assert settings.dir == Path("/srv/kubenv/profiles")
        assert settings.kube_dir == isolated_env / ".kube"
        assert settings.index_active is True
        assert settings.log_level == "DEBUG"
        assert settings.audit_log == Path("/var/log/kubenv/audit.log")
        assert settings.source == settings_file

    def test_env_points_at_file(self, settings_file, monkeypatch):
        monkeypatch.setenv("KUBENV_CONFIG", str(settings_file))

        assert load_settings().index_active is True

    def test_default_location(self, isolated_env):
        path = isolated_env / ".config" / "kubenv" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("index_active: yes\n")

        assert load_settings().index_active is True

    def test_environment_overrides_file(self, settings_file, monkeypatch):
        monkeypatch.setenv("KUBENV_DIR", "/tmp/other")
        monkeypatch.setenv("KUBENV_INDEX_ACTIVE", "0")

        settings = load_settings(settings_file)

        assert settings.dir == Path("/tmp/other")
        assert settings.index_active is False

    def test_kube_dir_env(self, monkeypatch):
        monkeypatch.setenv("KUBE_DIR", "/opt/kube")

        assert load_settings().kube_dir == Path("/opt/kube")

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        path = tmp_path / "kubenv.yaml"
        path.write_text("colour: blue\nlog_level: info\n")

        settings = load_settings(path)

        assert settings.log_level == "INFO"
        assert "colour" in caplog.text

    def test_empty_file(self, tmp_path):
        path = tmp_path / "kubenv.yaml"
        path.write_text("")

        assert load_settings(path) == Settings(source=path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "kubenv.yaml"
        path.write_text("dir: [unclosed\n")

        with pytest.raises(SettingsError):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "kubenv.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(SettingsError):
            load_settings(path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(SettingsError):
            load_settings(tmp_path / "missing.yaml")


class TestOverrides:
    """Tests for Settings.with_overrides."""

    def test_none_values_are_ignored(self):
        base = Settings(dir=Path("/a"))

        assert base.with_overrides(dir=None, kube_dir=None) == base

    def test_values_are_coerced(self):
        settings = Settings().with_overrides(dir="/b", log_level="error")

        assert settings.dir == Path("/b")
        assert settings.log_level == "ERROR"
