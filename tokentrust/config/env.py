"""
Environment variable loading for TokenTrust.

- TOKENTRUST_SCORING_PROFILE: v2 | v1 (default: v2)
- TOKENTRUST_WEIGHTING_POLICY: participating | nominal (default: participating)
- TOKENTRUST_CRITICAL_REGISTRY_PATH: JSON {address: name} overriding built-in registry
- TOKENTRUST_SCAM_KEYWORDS_PATH: JSON array overriding built-in keyword list
- TOKENTRUST_PROBE_TIMEOUT_SEC: per-probe timeout for collector fan-out (default: 10)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is tokentrust/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SCORING_PROFILE = "v2"
DEFAULT_WEIGHTING_POLICY = "participating"
DEFAULT_PROBE_TIMEOUT_SEC = 10.0


def load_tokentrust_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH)


def get_scoring_profile_name() -> str:
    """Return TOKENTRUST_SCORING_PROFILE, lowercased. Default: v2."""
    load_tokentrust_env()
    raw = (os.getenv("TOKENTRUST_SCORING_PROFILE") or "").strip().lower()
    return raw or DEFAULT_SCORING_PROFILE


def get_weighting_policy_name() -> str:
    """Return TOKENTRUST_WEIGHTING_POLICY, lowercased. Default: participating."""
    load_tokentrust_env()
    raw = (os.getenv("TOKENTRUST_WEIGHTING_POLICY") or "").strip().lower()
    return raw or DEFAULT_WEIGHTING_POLICY


def _optional_path(var: str) -> Path | None:
    load_tokentrust_env()
    raw = (os.getenv(var) or "").strip()
    return Path(raw) if raw else None


def get_critical_registry_path() -> Path | None:
    """Return override path for the critical-infrastructure registry, if set."""
    return _optional_path("TOKENTRUST_CRITICAL_REGISTRY_PATH")


def get_scam_keywords_path() -> Path | None:
    """Return override path for the scam-keyword list, if set."""
    return _optional_path("TOKENTRUST_SCAM_KEYWORDS_PATH")


def get_probe_timeout_sec() -> float:
    """
    Return TOKENTRUST_PROBE_TIMEOUT_SEC as a positive float.
    Falls back to the default for empty, non-numeric or non-positive values.
    """
    load_tokentrust_env()
    raw = (os.getenv("TOKENTRUST_PROBE_TIMEOUT_SEC") or "").strip()
    try:
        value = float(raw) if raw else DEFAULT_PROBE_TIMEOUT_SEC
    except ValueError:
        return DEFAULT_PROBE_TIMEOUT_SEC
    return value if value > 0 else DEFAULT_PROBE_TIMEOUT_SEC
