"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures and configuration for all tests:
- SQLite-backed cart tables (file databases, since every operation opens
  a fresh connection)
- Loopback TCP endpoints for latency probing
"""

import asyncio
import socket
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

# Add the project root directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cartstore.adapters.database.connection import ConnectionDescriptor
from cartstore.models.cart import build_cart_table
from cartstore.repositories.cart import CartRepository

CART_TABLE = "cart_items"


@pytest.fixture
def sqlite_path(tmp_path) -> Path:
    """Path of a SQLite database holding an empty cart table."""
    path = tmp_path / "cart.db"
    engine = create_engine(f"sqlite:///{path}")
    table = build_cart_table(CART_TABLE)
    table.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def descriptor(sqlite_path) -> ConnectionDescriptor:
    """Descriptor for the SQLite cart database."""
    return ConnectionDescriptor(make_url(f"sqlite+aiosqlite:///{sqlite_path}"))


@pytest.fixture
def unreachable_descriptor(tmp_path) -> ConnectionDescriptor:
    """Descriptor for a SQLite file whose directory does not exist."""
    return ConnectionDescriptor(make_url(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'cart.db'}"))


@pytest_asyncio.fixture
async def repository(descriptor) -> CartRepository:
    """Cart repository using the read-then-write add path."""
    repo = CartRepository(descriptor, CART_TABLE)
    yield repo
    await repo.close()


@pytest_asyncio.fixture
async def atomic_repository(descriptor) -> CartRepository:
    """Cart repository using the single-statement atomic add path."""
    repo = CartRepository(descriptor, CART_TABLE, atomic_add=True)
    yield repo
    await repo.close()


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest_asyncio.fixture
async def tcp_server():
    """A loopback TCP server accepting and dropping connections."""

    async def handle(reader, writer):
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    yield server
    server.close()
    await server.wait_closed()
