"""
TokenTrust: trust verdicts for Solana SPL tokens.

Turns heterogeneous, partial evidence about a token (registry listings,
on-chain authorities, activity, venue and social snapshots) into a
deterministic, explainable verification result and risk assessment.
"""

__version__ = "0.2.0"
