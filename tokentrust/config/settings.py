"""
Application settings.

Responsibilities:
- Collect configuration from tokentrust.config.env into one typed object.
- Validate profile and policy names so bad configuration fails at startup,
  not in the middle of an analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tokentrust.config import env
from tokentrust.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    scoring_profile: str
    weighting_policy: str
    critical_registry_path: Path | None
    scam_keywords_path: Path | None
    probe_timeout_sec: float


def get_settings() -> Settings:
    """
    Return the current settings, read fresh from the environment.

    Raises:
        ConfigurationError: unknown scoring profile or weighting policy.
    """
    from tokentrust.analysis_engine.profiles import PROFILES
    from tokentrust.analysis_engine.weighting import POLICIES

    profile = env.get_scoring_profile_name()
    if profile not in PROFILES:
        raise ConfigurationError(
            f"unknown scoring profile {profile!r}; expected one of {sorted(PROFILES)}"
        )
    policy = env.get_weighting_policy_name()
    if policy not in POLICIES:
        raise ConfigurationError(
            f"unknown weighting policy {policy!r}; expected one of {sorted(POLICIES)}"
        )
    return Settings(
        scoring_profile=profile,
        weighting_policy=policy,
        critical_registry_path=env.get_critical_registry_path(),
        scam_keywords_path=env.get_scam_keywords_path(),
        probe_timeout_sec=env.get_probe_timeout_sec(),
    )
