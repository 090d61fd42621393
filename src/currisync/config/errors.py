"""Errors raised while reading currisync settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A ``CURRISYNC_*`` or ``DATABASE_URI`` value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """A required setting, such as ``CURRISYNC_API_URL``, is unset or blank."""
