"""Token analysis orchestration."""

from tokentrust.analytics.token_pipeline import TokenVerdict, run_token_analysis

__all__ = ["TokenVerdict", "run_token_analysis"]
