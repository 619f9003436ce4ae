"""
Library settings using pydantic-settings.

Defaults can be overridden with TIERCONF_-prefixed environment variables:

  TIERCONF_SEPARATOR=/
  TIERCONF_ENV_PREFIX=MYAPP_
  TIERCONF_ENV_LIST_SEPARATOR=,

Settings are passed explicitly to the objects that use them; nothing here
is module-level mutable state.
"""

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import tierconf.constants as constants


class Settings(_pydantic_settings.BaseSettings):
    """
    tierconf defaults.

    Precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (TIERCONF_*)
    3. Built-in defaults from tierconf.constants
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.SETTINGS_ENV_PREFIX,
        extra="ignore",
    )

    separator: str = constants.DEFAULT_SEPARATOR
    """Tier separator for key paths. Empty disables nesting."""

    tag: str = _pydantic.Field(default=constants.DEFAULT_TAG, min_length=1)
    """Field metadata key used for struct key overrides."""

    env_prefix: str = constants.DEFAULT_ENV_PREFIX
    """Prefix selecting the environment variables read by EnvSource."""

    env_list_separator: str = constants.DEFAULT_ENV_LIST_SEPARATOR
    """Separator splitting list values in environment variables."""
