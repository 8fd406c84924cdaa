"""Configuration error definitions.

Configuration errors are fatal: the CLI reports them and exits before any
stage runs.
"""

from __future__ import annotations

from tweetdrop.domain.errors import TweetdropError


class ConfigurationError(TweetdropError):
    """Raised when a configuration value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are absent or blank."""
