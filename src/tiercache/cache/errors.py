from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a tier or cache is built from an invalid layout."""
