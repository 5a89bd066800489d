"""
Cart table definition.

The table name is deployment configuration, so the table is built at runtime
with SQLAlchemy Core instead of a declarative model. Column names are
lower case to match unquoted identifiers created by plain PostgreSQL DDL.

Usage:
    from cartstore.models.cart import build_cart_table

    carts = build_cart_table("cart_items")
"""

from typing import Optional

from sqlalchemy import Column, Integer, MetaData, Table, Text, UniqueConstraint

from cartstore.exceptions import ConfigurationError


def build_cart_table(name: str, metadata: Optional[MetaData] = None) -> Table:
    """
    Build the cart table.

    Args:
        name: Table name
        metadata: MetaData to attach the table to; a fresh one by default

    Returns:
        Table: ``(userid, productid, quantity)`` unique on ``(userid, productid)``
    """
    if not name:
        raise ConfigurationError("Cart table name is required")

    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column("userid", Text, nullable=False),
        Column("productid", Text, nullable=False),
        Column("quantity", Integer, nullable=False),
        UniqueConstraint("userid", "productid", name=f"{name}_userid_productid_key"),
    )
