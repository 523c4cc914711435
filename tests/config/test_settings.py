"""Tests for the command-line settings loaded from CONFVIZ_* variables."""

import pathlib as _pathlib

import pydantic as _pydantic
import pytest as _pytest

import confviz.config.settings as settings


class TestCliSettingsDefaults:
    """Defaults with no CONFVIZ_* variables set."""

    def test_defaults(self, isolated_env: None) -> None:
        cli_settings = settings.CliSettings()
        assert cli_settings.environment == "Production"
        assert cli_settings.application_name is None
        assert cli_settings.content_root is None
        assert cli_settings.width is None
        assert cli_settings.no_color is False

    def test_content_root_defaults_to_cwd(
        self,
        isolated_env: None,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        cli_settings = settings.CliSettings()
        assert cli_settings.resolve_content_root().resolve() == tmp_path.resolve()
        assert cli_settings.resolve_application_name() == tmp_path.name


class TestCliSettingsFromEnvironment:
    """CONFVIZ_* variables override the defaults."""

    def test_env_vars_are_read(
        self,
        isolated_env: None,
        tmp_path: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("CONFVIZ_ENVIRONMENT", "Staging")
        monkeypatch.setenv("CONFVIZ_APPLICATION_NAME", "billing-api")
        monkeypatch.setenv("CONFVIZ_CONTENT_ROOT", str(tmp_path))
        monkeypatch.setenv("CONFVIZ_WIDTH", "160")
        monkeypatch.setenv("CONFVIZ_NO_COLOR", "true")

        cli_settings = settings.CliSettings()
        assert cli_settings.environment == "Staging"
        assert cli_settings.resolve_application_name() == "billing-api"
        assert cli_settings.resolve_content_root() == tmp_path
        assert cli_settings.width == 160
        assert cli_settings.no_color is True

    def test_width_below_minimum_is_rejected(
        self,
        isolated_env: None,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("CONFVIZ_WIDTH", "10")
        with _pytest.raises(_pydantic.ValidationError):
            settings.CliSettings()
