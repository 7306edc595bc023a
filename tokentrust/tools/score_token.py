"""
Score one token from an evidence bundle JSON file and print the verdict.

    python -m tokentrust.tools.score_token bundle.json [--profile v1] [--policy nominal] [--now 2024-05-01T00:00:00Z]

Exit codes: 0 ok, 1 unreadable file or bad configuration, 2 invalid evidence.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from tokentrust.analysis_engine.profiles import PROFILES, get_profile
from tokentrust.analysis_engine.weighting import POLICIES, get_policy
from tokentrust.analytics.token_pipeline import run_token_analysis
from tokentrust.core.exceptions import ConfigurationError, EvidenceValidationError
from tokentrust.evidence.models import EvidenceBundle
from tokentrust.trust_logging import configure_structlog, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_EVIDENCE = 2


def _parse_now(raw: str | None) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    value = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Score a token's trust from a collected evidence bundle.")
    parser.add_argument("bundle", type=Path, help="Path to evidence bundle JSON")
    parser.add_argument("--profile", choices=sorted(PROFILES), default=None, help="Scoring profile (default: from env)")
    parser.add_argument("--policy", choices=sorted(POLICIES), default=None, help="Confidence weighting policy (default: from env)")
    parser.add_argument("--now", default=None, help="Reference time for age derivation, ISO 8601 (default: current UTC time)")
    args = parser.parse_args(argv)
    configure_structlog(to_stderr=True)

    try:
        now = _parse_now(args.now)
    except ValueError as e:
        print("ERROR: invalid --now:", e, file=sys.stderr)
        return EXIT_ERROR

    try:
        with open(args.bundle, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("score_token_read_failed", path=str(args.bundle), error=str(e))
        print("ERROR:", e, file=sys.stderr)
        return EXIT_ERROR
    if not isinstance(payload, dict):
        print("ERROR: evidence bundle must be a JSON object", file=sys.stderr)
        return EXIT_INVALID_EVIDENCE

    try:
        bundle = EvidenceBundle.from_payload(payload)
    except EvidenceValidationError as e:
        logger.warning("score_token_invalid_evidence", source=e.source, errors=e.errors)
        print("ERROR:", e, file=sys.stderr)
        return EXIT_INVALID_EVIDENCE

    try:
        verdict = run_token_analysis(
            bundle,
            now=now,
            profile=get_profile(args.profile) if args.profile else None,
            policy=get_policy(args.policy) if args.policy else None,
        )
    except ConfigurationError as e:
        print("ERROR:", e, file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(verdict.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
