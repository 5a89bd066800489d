"""
Cart repository factory.

Runs replica selection once and hands the result to a new CartRepository.
The factory keeps no state: each call probes again and returns a new
repository, and the caller owns it for the rest of the process.
"""

import logging
from typing import Optional

from cartstore.adapters.database.connection import ConnectionFactory
from cartstore.adapters.database.probe import LatencyProbe
from cartstore.adapters.database.selector import HostSelector
from cartstore.exceptions import ConfigurationError
from cartstore.repositories.cart import CartRepository
from cartstore.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class CartRepositoryFactory:
    """Factory for creating cart repositories bound to the fastest replica."""

    @classmethod
    def probe_from_settings(cls, settings: Settings) -> LatencyProbe:
        """Build the latency probe configured by ``CART_PROBE_*`` settings."""
        return LatencyProbe(
            attempts=settings.CART_PROBE_ATTEMPTS,
            interval=settings.CART_PROBE_INTERVAL,
            timeout=settings.CART_PROBE_TIMEOUT,
        )

    @classmethod
    async def create(
        cls,
        settings: Optional[Settings] = None,
        probe: Optional[LatencyProbe] = None,
    ) -> CartRepository:
        """
        Select a replica and build a repository for it.

        Args:
            settings: Settings to use; the cached environment settings by default
            probe: Probe to use; built from settings by default

        Returns:
            CartRepository: Repository bound to the selected replica

        Raises:
            ConfigurationError: If configuration is missing or no replica is reachable
        """
        if settings is None:
            settings = get_settings()
        if not settings.POSTGRES_TABLE_NAME:
            raise ConfigurationError("POSTGRES_TABLE_NAME is not configured.")

        candidates = settings.host_candidates()
        logger.info(f"Probing {len(candidates)} database host(s)")

        selector = HostSelector(probe or cls.probe_from_settings(settings))
        selected = await selector.select(candidates)

        descriptor = ConnectionFactory(settings.DATABASE_DRIVER).build(
            selected,
            database=settings.POSTGRES_DATABASE_NAME,
            username=settings.POSTGRES_USERNAME,
            password=settings.POSTGRES_PASSWORD.get_secret_value(),
        )
        repository = CartRepository(
            descriptor,
            settings.POSTGRES_TABLE_NAME,
            atomic_add=settings.CART_ATOMIC_ADD,
            selected_host=selected,
            echo=settings.DEBUG,
        )
        logger.info(f"Cart repository ready on {selected.address} (table {settings.POSTGRES_TABLE_NAME})")
        return repository
