"""
This package contains repository implementations for database operations.

Repositories keep SQL out of the HTTP layer: routes call repository methods
and only ever see schemas and cart store exceptions.
"""

from cartstore.repositories.cart import CartRepository

__all__ = ['CartRepository']
