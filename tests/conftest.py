"""
Shared pytest fixtures for tierconf tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import tierconf.settings as settings_mod

# Settings variables that would change library defaults under test
ENV_KEYS_TO_CLEAR = [
    "TIERCONF_SEPARATOR",
    "TIERCONF_TAG",
    "TIERCONF_ENV_PREFIX",
    "TIERCONF_ENV_LIST_SEPARATOR",
]


@_pytest.fixture(autouse=True)
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove tierconf settings variables so every test sees the defaults."""
    for key in ENV_KEYS_TO_CLEAR:
        if key in _os.environ:
            monkeypatch.delenv(key)


@_pytest.fixture
def clean_settings() -> settings_mod.Settings:
    """Settings instance with built-in defaults."""
    return settings_mod.Settings()


@_pytest.fixture
def write_config(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """
    Factory writing a config file into a temporary directory.

    Usage:
        def test_something(write_config):
            path = write_config("config.yaml", "a: 1\\n")
    """

    def write(name: str, content: str) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return write
