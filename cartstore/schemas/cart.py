"""
Schemas for cart contents.
"""

from typing import List

from pydantic import BaseModel, Field


class CartItem(BaseModel):
    """A product and its accumulated quantity in a cart."""

    product_id: str = Field(..., description="Product identifier")
    quantity: int = Field(..., ge=0, description="Total quantity of the product")


class Cart(BaseModel):
    """All items held for one user. An empty cart still carries the user id."""

    user_id: str = Field(..., description="Owner of the cart")
    items: List[CartItem] = Field(default_factory=list, description="Items in the cart")


class AddItemRequest(BaseModel):
    """Request body for adding an item to a cart."""

    product_id: str = Field(..., min_length=1, description="Product identifier")
    quantity: int = Field(..., ge=0, description="Quantity to add")
