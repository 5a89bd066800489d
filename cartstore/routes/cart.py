"""
Router for cart endpoints.

This module exposes the cart repository over HTTP:
- Adding items to a cart
- Fetching a cart
- Emptying a cart

Storage failures propagate as StorageUnavailableError and are turned into
412 responses by the error handlers.
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from cartstore.repositories.cart import CartRepository
from cartstore.schemas.cart import AddItemRequest
from cartstore.utils.api_response import success_response

router = APIRouter(
    prefix="/api/carts",
    tags=["carts"]
)

logger = logging.getLogger(__name__)

def get_cart_repository(request: Request) -> CartRepository:
    """Get the repository built at application startup."""
    return request.app.state.cart_repository

@router.post("/{user_id}/items")
async def add_item(
    user_id: str,
    item: AddItemRequest,
    repository: CartRepository = Depends(get_cart_repository)
):
    """Add an item to a user's cart"""
    await repository.add_item(user_id, item.product_id, item.quantity)
    return JSONResponse(
        content=success_response(message="Item added to cart"),
        status_code=status.HTTP_201_CREATED
    )

@router.get("/{user_id}")
async def get_cart(
    user_id: str,
    repository: CartRepository = Depends(get_cart_repository)
):
    """Get a user's cart"""
    cart = await repository.get_cart(user_id)
    return success_response(data=cart.model_dump())

@router.delete("/{user_id}")
async def empty_cart(
    user_id: str,
    repository: CartRepository = Depends(get_cart_repository)
):
    """Remove all items from a user's cart"""
    await repository.empty_cart(user_id)
    return success_response(message="Cart emptied")
