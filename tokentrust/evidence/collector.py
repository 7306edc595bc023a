"""
Concurrent fan-out of evidence probes.

Callers supply one async callable per source. Each runs under its own
timeout; a probe that raises, times out, or returns an invalid payload
becomes a non-participating check. Results come back in the order the
probes were given, regardless of completion order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import ValidationError

from tokentrust.analysis_engine.models import EvidenceCheck
from tokentrust.config.env import get_probe_timeout_sec
from tokentrust.evidence.models import RegistryProbe
from tokentrust.evidence.probes import NOMINAL_SOURCE_WEIGHTS
from tokentrust.trust_logging import get_logger

logger = get_logger(__name__)

Probe = Callable[[], Awaitable[Any]]


def _to_check(source: str, result: Any) -> EvidenceCheck:
    if isinstance(result, EvidenceCheck):
        return result
    if isinstance(result, RegistryProbe):
        return result.to_check()
    if isinstance(result, Mapping):
        payload = {"source": source, **result}
        try:
            return RegistryProbe.model_validate(payload).to_check()
        except ValidationError as e:
            logger.warning("evidence_probe_invalid", source=source, error_count=e.error_count())
            return EvidenceCheck.absent(source, NOMINAL_SOURCE_WEIGHTS.get(source))
    logger.warning("evidence_probe_invalid", source=source, result_type=type(result).__name__)
    return EvidenceCheck.absent(source, NOMINAL_SOURCE_WEIGHTS.get(source))


async def _run_probe(source: str, probe: Probe, timeout: float) -> EvidenceCheck:
    try:
        result = await asyncio.wait_for(probe(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.debug("evidence_probe_timeout", source=source, timeout_sec=timeout)
        return EvidenceCheck.absent(source, NOMINAL_SOURCE_WEIGHTS.get(source))
    except Exception as e:
        logger.debug("evidence_probe_failed", source=source, error=str(e))
        return EvidenceCheck.absent(source, NOMINAL_SOURCE_WEIGHTS.get(source))
    return _to_check(source, result)


async def collect_checks(probes: Mapping[str, Probe], timeout_sec: float | None = None) -> list[EvidenceCheck]:
    """Run all probes concurrently; one EvidenceCheck per probe, in input order."""
    timeout = timeout_sec if timeout_sec is not None else get_probe_timeout_sec()
    if not probes:
        return []
    return list(await asyncio.gather(*(_run_probe(source, probe, timeout) for source, probe in probes.items())))
