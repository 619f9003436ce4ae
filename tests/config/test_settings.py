"""Tests for library settings."""

import pydantic as _pydantic
import pytest as _pytest

import tierconf.constants as constants
import tierconf.settings as settings_mod


class TestSettingsDefaults:
    """Default values come from constants."""

    def test_defaults(self, clean_settings: settings_mod.Settings) -> None:
        """Without environment overrides, constants apply."""
        settings = clean_settings
        assert settings.separator == constants.DEFAULT_SEPARATOR
        assert settings.tag == constants.DEFAULT_TAG
        assert settings.env_prefix == constants.DEFAULT_ENV_PREFIX
        assert settings.env_list_separator == constants.DEFAULT_ENV_LIST_SEPARATOR


class TestSettingsOverrides:
    """Environment variables and arguments override defaults."""

    def test_environment(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """TIERCONF_ variables override defaults."""
        monkeypatch.setenv("TIERCONF_SEPARATOR", "/")
        monkeypatch.setenv("TIERCONF_ENV_PREFIX", "MYAPP_")
        settings = settings_mod.Settings()
        assert settings.separator == "/"
        assert settings.env_prefix == "MYAPP_"

    def test_arguments_win(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Constructor arguments take precedence over the environment."""
        monkeypatch.setenv("TIERCONF_SEPARATOR", "/")
        assert settings_mod.Settings(separator=":").separator == ":"

    def test_unknown_variables_ignored(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Unrelated TIERCONF_ variables are ignored."""
        monkeypatch.setenv("TIERCONF_UNKNOWN", "x")
        settings_mod.Settings()

    def test_empty_tag_rejected(self) -> None:
        """The tag must not be empty."""
        with _pytest.raises(_pydantic.ValidationError):
            settings_mod.Settings(tag="")
