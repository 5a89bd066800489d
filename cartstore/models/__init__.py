"""
Table definitions for the cart store.
"""

from cartstore.models.cart import build_cart_table

__all__ = ['build_cart_table']
