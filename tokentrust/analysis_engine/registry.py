"""
Token registries injected into verification.

A TokenRegistry is a small, swappable allow-list of addresses with display
names. The critical-infrastructure registry short-circuits verification to
OFFICIAL; the governance registry feeds the Governance Token probe.
Built-in defaults can be replaced with a JSON object {address: name} via
TOKENTRUST_CRITICAL_REGISTRY_PATH.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from tokentrust.trust_logging import get_logger

logger = get_logger(__name__)

DEFAULT_CRITICAL_TOKENS: Mapping[str, str] = MappingProxyType({
    "So11111111111111111111111111111111111111112": "Native SOL wrapper",
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": "Circle USDC",
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": "Tether USDT",
})

DEFAULT_GOVERNANCE_TOKENS: Mapping[str, str] = MappingProxyType({
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": "Jupiter DAO",
    "ORCAX7vD6bGYMGYF2LBuqRw4FNjWs4u5H6VqqqsJ7vc": "Orca DAO",
    "RLBxxFkseAZ4RgJH3Sqn8jXxhmGoz9jWxDNJMh8pL7a": "Rollbit Coin",
})


class TokenRegistry:
    """Immutable address -> display name lookup."""

    def __init__(self, entries: Mapping[str, str], label: str = "registry") -> None:
        self._entries = MappingProxyType({str(k).strip(): str(v) for k, v in entries.items() if k})
        self.label = label

    def lookup(self, address: str) -> str | None:
        return self._entries.get((address or "").strip())

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.lookup(address) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TokenRegistry(label={self.label!r}, size={len(self)})"

    @classmethod
    def from_file(cls, path: Path, label: str, fallback: Mapping[str, str]) -> TokenRegistry:
        """
        Load a registry from a JSON object file. Missing file or malformed
        content falls back to the given defaults.
        """
        if not path.is_file():
            logger.debug("token_registry_file_missing", registry=label, path=str(path))
            return cls(fallback, label)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("token_registry_load_failed", registry=label, path=str(path), error=str(e))
            return cls(fallback, label)
        if not isinstance(data, dict):
            logger.warning("token_registry_not_object", registry=label, path=str(path))
            return cls(fallback, label)
        return cls(data, label)


def default_critical_registry() -> TokenRegistry:
    return TokenRegistry(DEFAULT_CRITICAL_TOKENS, "critical")


def default_governance_registry() -> TokenRegistry:
    return TokenRegistry(DEFAULT_GOVERNANCE_TOKENS, "governance")


def load_critical_registry(path: Path | None = None) -> TokenRegistry:
    """Critical registry from path, TOKENTRUST_CRITICAL_REGISTRY_PATH, or built-in defaults."""
    if path is None:
        from tokentrust.config.env import get_critical_registry_path

        path = get_critical_registry_path()
    if path is None:
        return default_critical_registry()
    return TokenRegistry.from_file(path, "critical", DEFAULT_CRITICAL_TOKENS)
