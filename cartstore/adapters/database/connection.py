"""
Connection descriptors for the selected replica.

A ConnectionDescriptor wraps a SQLAlchemy URL holding the credentials. Its
repr and str show driver, host, port and database only, so a descriptor can
safely appear in a log line or an exception without exposing the password.
"""

from typing import Optional

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from cartstore.schemas.hosts import SelectedHost

DEFAULT_DRIVER = "postgresql+psycopg"


class ConnectionDescriptor:
    """Opaque, non-printable description of how to reach the cart database."""

    __slots__ = ("_url",)

    def __init__(self, url: URL):
        self._url = url

    @property
    def drivername(self) -> str:
        return self._url.drivername

    @property
    def host(self) -> Optional[str]:
        return self._url.host

    @property
    def port(self) -> Optional[int]:
        return self._url.port

    @property
    def database(self) -> Optional[str]:
        return self._url.database

    @property
    def location(self) -> str:
        """Host (or file) the descriptor points at, for diagnostics."""
        if self._url.host:
            return f"{self._url.host}:{self._url.port}" if self._url.port else self._url.host
        return self._url.database or "<unknown>"

    def create_engine(self, echo: bool = False) -> AsyncEngine:
        """
        Create an async engine that opens a new connection for every checkout.

        NullPool closes the DBAPI connection as soon as it is released, so no
        connection outlives the operation that opened it.
        """
        return create_async_engine(self._url, echo=echo, poolclass=NullPool)

    def __repr__(self) -> str:
        return (
            f"ConnectionDescriptor(driver={self.drivername!r}, "
            f"location={self.location!r}, database={self.database!r})"
        )

    __str__ = __repr__


class ConnectionFactory:
    """Assembles connection descriptors. Performs no I/O."""

    def __init__(self, drivername: str = DEFAULT_DRIVER):
        self.drivername = drivername

    def build(
        self,
        selected_host: SelectedHost,
        database: str,
        username: str,
        password: str,
    ) -> ConnectionDescriptor:
        """
        Build a descriptor for the selected replica.

        Args:
            selected_host: Replica chosen by the HostSelector
            database: Database name
            username: Database user
            password: Database password

        Returns:
            ConnectionDescriptor: Descriptor usable by CartRepository
        """
        url = URL.create(
            drivername=self.drivername,
            username=username,
            password=password,
            host=selected_host.address,
            port=selected_host.port,
            database=database,
        )
        return ConnectionDescriptor(url)
