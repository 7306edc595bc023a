"""
Configuration for TokenTrust.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for profile, policy and override paths.
"""

from tokentrust.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
