"""Errors raised while resolving Strmarr's startup configuration.

Any of these is fatal: the CLI exits non-zero before a reconciliation run starts.
"""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A configuration value is present but unusable (bad URL, cron expression, number)."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank."""

    def __init__(self, names: tuple[str, ...]) -> None:
        super().__init__(f"Missing configuration for: {', '.join(names)}")
        self.names = names
