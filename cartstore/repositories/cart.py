"""
Cart repository backed by a single table on the selected replica.

Each operation opens its own connection through a NullPool engine and
releases it when the ``async with`` block exits, whether or not the
operation succeeded. Storage failures are re-raised as
StorageUnavailableError with a message naming only the host and table.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite

from cartstore.adapters.database.connection import ConnectionDescriptor
from cartstore.exceptions import ConfigurationError, StorageUnavailableError
from cartstore.models.cart import build_cart_table
from cartstore.schemas.cart import Cart, CartItem
from cartstore.schemas.hosts import SelectedHost

logger = logging.getLogger(__name__)

# Dialects with INSERT .. ON CONFLICT support
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepository:
    """
    Repository for per-user cart contents.

    Attributes:
        table (Table): The cart table
        engine (AsyncEngine): Engine that never pools connections
        atomic_add (bool): Use a single increment-or-insert statement in add_item
        selected_host (Optional[SelectedHost]): Replica chosen at startup
    """

    def __init__(
        self,
        descriptor: ConnectionDescriptor,
        table_name: str,
        atomic_add: bool = False,
        selected_host: Optional[SelectedHost] = None,
        echo: bool = False,
    ):
        """
        Initialize the repository. No connection is opened here.

        Args:
            descriptor: Connection descriptor for the selected replica
            table_name: Name of the cart table
            atomic_add: Accumulate quantities in one atomic upsert instead of
                reading the current total first
            selected_host: Replica the descriptor points at, if known
            echo: Echo SQL statements to the log
        """
        dialect = descriptor.drivername.split("+", 1)[0]
        if dialect not in _UPSERT_INSERTS:
            raise ConfigurationError(f"Unsupported database dialect for cart storage: {dialect}")

        self._descriptor = descriptor
        self._selected_host = selected_host
        self._insert = _UPSERT_INSERTS[dialect]
        self.table = build_cart_table(table_name)
        self.atomic_add = atomic_add
        self.engine = descriptor.create_engine(echo=echo)

    @property
    def selected_host(self) -> Optional[SelectedHost]:
        return self._selected_host

    def _storage_error(self, operation: str, error: Exception) -> StorageUnavailableError:
        logger.error(
            f"{operation} failed on {self._descriptor.location} "
            f"(table {self.table.name}): {type(error).__name__}",
            exc_info=error
        )
        return StorageUnavailableError(
            f"Can't access cart storage at {self._descriptor.location} "
            f"(table {self.table.name}): {type(error).__name__}"
        )

    async def add_item(self, user_id: str, product_id: str, quantity: int) -> None:
        """
        Add ``quantity`` units of a product to a user's cart.

        The stored quantity is always the running total. By default the current
        total is read and the new total written back in the same transaction;
        two concurrent calls on the same key can still both read the old total.
        With ``atomic_add`` the addition happens inside a single upsert.

        Raises:
            ValueError: If quantity is negative
            StorageUnavailableError: If the table cannot be read or written
        """
        if quantity < 0:
            raise ValueError("quantity must not be negative")

        logger.info(f"add_item called for user_id={user_id}")
        t = self.table
        try:
            async with self.engine.begin() as conn:
                if self.atomic_add:
                    stmt = self._insert(t).values(userid=user_id, productid=product_id, quantity=quantity)
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[t.c.userid, t.c.productid],
                        set_={"quantity": t.c.quantity + stmt.excluded.quantity},
                    )
                else:
                    # Sum in case duplicate rows slipped in without the constraint
                    result = await conn.execute(
                        select(func.coalesce(func.sum(t.c.quantity), 0)).where(
                            t.c.userid == user_id, t.c.productid == product_id
                        )
                    )
                    total = int(result.scalar_one()) + quantity
                    stmt = self._insert(t).values(userid=user_id, productid=product_id, quantity=total)
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[t.c.userid, t.c.productid],
                        set_={"quantity": stmt.excluded.quantity},
                    )
                await conn.execute(stmt)
        except Exception as e:
            raise self._storage_error("add_item", e) from e

    async def get_cart(self, user_id: str) -> Cart:
        """
        Get the cart of a user.

        Returns:
            Cart: One item per stored row; no items if the user has none

        Raises:
            StorageUnavailableError: If the table cannot be read
        """
        logger.info(f"get_cart called for user_id={user_id}")
        t = self.table
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(
                    select(t.c.productid, t.c.quantity).where(t.c.userid == user_id)
                )
                rows = result.all()
        except Exception as e:
            raise self._storage_error("get_cart", e) from e

        return Cart(
            user_id=user_id,
            items=[CartItem(product_id=row.productid, quantity=row.quantity) for row in rows],
        )

    async def empty_cart(self, user_id: str) -> None:
        """
        Delete every item of a user's cart. Emptying an empty cart is a no-op.

        Raises:
            StorageUnavailableError: If the table cannot be written
        """
        logger.info(f"empty_cart called for user_id={user_id}")
        try:
            async with self.engine.begin() as conn:
                await conn.execute(delete(self.table).where(self.table.c.userid == user_id))
        except Exception as e:
            raise self._storage_error("empty_cart", e) from e

    async def ping(self) -> bool:
        """
        Check that a connection to the store can be opened.

        Returns:
            bool: True if a connection was opened, False on any failure
        """
        try:
            async with self.engine.connect():
                return True
        except Exception as e:
            logger.warning(f"Ping to {self._descriptor.location} failed: {type(e).__name__}")
            return False

    async def close(self) -> None:
        """Dispose of the engine."""
        await self.engine.dispose()
