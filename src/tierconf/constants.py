"""
Shared constants for tierconf.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

DEFAULT_SEPARATOR = "."
"""Default separator between tiers of a key path, e.g. ``db.postgres.host``."""

DEFAULT_TAG = "config"
"""Default field metadata key used to override the config key of a struct field."""

DEFAULT_ENV_PREFIX = ""
"""Default prefix identifying environment variables of interest (all of them)."""

DEFAULT_ENV_LIST_SEPARATOR = ":"
"""Separator used to split list values held in environment variables."""

DEFAULT_LIST_JOINER = ","
"""Joiner used when a string slice is coerced back into a string."""

SETTINGS_ENV_PREFIX = "TIERCONF_"
"""Environment prefix for the library's own settings."""
