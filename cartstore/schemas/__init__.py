"""
Pydantic models shared across the cart store.
"""

from cartstore.schemas.cart import Cart, CartItem, AddItemRequest
from cartstore.schemas.hosts import (
    DEFAULT_POSTGRES_PORT,
    HostCandidate,
    LatencyMeasurement,
    SelectedHost,
    parse_host_list,
)

__all__ = [
    "AddItemRequest",
    "Cart",
    "CartItem",
    "DEFAULT_POSTGRES_PORT",
    "HostCandidate",
    "LatencyMeasurement",
    "SelectedHost",
    "parse_host_list",
]
