"""Errors raised by the configuration layer."""
from __future__ import annotations


class ConfigError(Exception):
    """A config file could not be read or produced invalid values."""


class ConfigValidationError(ConfigError):
    """
    Cross-field checks failed.

    ``errors`` holds every problem found, so the caller can report them
    together instead of one per run.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        listing = "; ".join(self.errors)
        super().__init__(f"Configuration validation failed ({len(self.errors)}): {listing}")
