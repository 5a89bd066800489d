"""
Latency probing for database replicas.

A probe attempt is a bare TCP connect to the replica's address and port,
timed with a monotonic clock and bounded by an explicit timeout. Failed
attempts are expected while evaluating replicas, so they are reported as an
unsuccessful LatencyMeasurement instead of an exception.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional, Sequence

from cartstore.schemas.hosts import HostCandidate, LatencyMeasurement

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 5
DEFAULT_INTERVAL = 1.0
DEFAULT_TIMEOUT = 5.0

Connector = Callable[[HostCandidate], Awaitable[None]]


async def open_tcp_connection(candidate: HostCandidate) -> None:
    """Open and immediately close a TCP connection to the candidate."""
    _, writer = await asyncio.open_connection(candidate.address, candidate.port)
    writer.close()
    await writer.wait_closed()


def mean_latency(measurements: Sequence[LatencyMeasurement]) -> Optional[float]:
    """
    Arithmetic mean of the successful attempts, in seconds.

    Returns:
        Optional[float]: None when no attempt succeeded
    """
    elapsed = [m.elapsed for m in measurements if m.success and m.elapsed is not None]
    if not elapsed:
        return None
    return sum(elapsed) / len(elapsed)


class LatencyProbe:
    """Measures round-trip cost of reaching one candidate host."""

    def __init__(
        self,
        attempts: int = DEFAULT_ATTEMPTS,
        interval: float = DEFAULT_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
        connector: Connector = open_tcp_connection,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Args:
            attempts: Number of attempts per host
            interval: Delay in seconds between two attempts on the same host
            timeout: Upper bound in seconds for a single attempt
            connector: Coroutine function that opens and closes a connection
            clock: Monotonic clock returning seconds
        """
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.attempts = attempts
        self.interval = interval
        self.timeout = timeout
        self.connector = connector
        self.clock = clock

    async def attempt(self, candidate: HostCandidate) -> LatencyMeasurement:
        """Run one timed attempt. Never raises."""
        start = self.clock()
        try:
            await asyncio.wait_for(self.connector(candidate), timeout=self.timeout)
        except Exception as e:
            # Any failure means "unreachable" for this attempt
            logger.debug(f"Probe of {candidate} failed: {type(e).__name__}")
            return LatencyMeasurement(host=candidate, elapsed=None, success=False)
        elapsed = max(self.clock() - start, 0.0)
        measurement = LatencyMeasurement(host=candidate, elapsed=elapsed, success=True)
        logger.debug(f"Probe of {candidate} took {measurement.elapsed_ms:.1f} ms")
        return measurement

    async def measure(self, candidate: HostCandidate) -> List[LatencyMeasurement]:
        """Run the full attempt sequence against one host."""
        measurements = []
        for i in range(self.attempts):
            if i:
                await asyncio.sleep(self.interval)
            measurements.append(await self.attempt(candidate))

        succeeded = sum(1 for m in measurements if m.success)
        logger.debug(f"Probed {candidate}: {succeeded}/{self.attempts} attempts succeeded")
        return measurements
