"""
Custom exceptions for the cart store.
"""

class CartStoreError(Exception):
    """Base exception for cart store errors."""
    pass

class ConfigurationError(CartStoreError):
    """Raised when the store cannot be configured, e.g. no replica is reachable."""
    pass

class StorageUnavailableError(CartStoreError):
    """Raised when a cart operation cannot reach or query the backing table."""

    code = "storage_precondition_failed"
