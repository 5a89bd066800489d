"""
Replica selection by lowest mean probe latency.
"""

import asyncio
import logging
from typing import Optional, Sequence

from cartstore.adapters.database.probe import LatencyProbe, mean_latency
from cartstore.exceptions import ConfigurationError
from cartstore.schemas.hosts import HostCandidate, SelectedHost

logger = logging.getLogger(__name__)


class HostSelector:
    """
    Picks the replica with the smallest mean latency.

    Every candidate is probed in its own task; all tasks are joined before a
    decision is made. Candidates without a single successful attempt are
    excluded, and ties go to the candidate listed first.
    """

    def __init__(self, probe: LatencyProbe):
        self.probe = probe

    async def select(self, candidates: Sequence[HostCandidate]) -> SelectedHost:
        """
        Probe all candidates and return the fastest one.

        Raises:
            ConfigurationError: If there are no candidates or none is reachable
        """
        if not candidates:
            raise ConfigurationError("No database hosts configured.")

        results = await asyncio.gather(*(self.probe.measure(c) for c in candidates))

        best: Optional[HostCandidate] = None
        best_latency = float("inf")
        for candidate, measurements in zip(candidates, results):
            latency = mean_latency(measurements)
            if latency is None:
                logger.warning(f"Database host {candidate.address} is unreachable")
                continue
            logger.info(f"Database host {candidate.address} mean latency: {latency * 1000:.1f} ms")
            if latency < best_latency:
                best, best_latency = candidate, latency

        if best is None:
            raise ConfigurationError("None of the database hosts are reachable.")

        logger.info(f"Selected database host: {best.address} with latency: {best_latency * 1000:.1f} ms")
        return SelectedHost(host=best, mean_latency=best_latency)
