# gpustore/schemas/cart.py
import uuid

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class CartItemCreate(SQLModel):
    """
    Payload for adding to cart.
    """

    model_config = ConfigDict(extra="forbid")

    video_card_id: uuid.UUID
    quantity: int = Field(default=1, gt=0)


class CartQuantityChange(SQLModel):
    """
    Payload for the +/- buttons: apply `change` to the current quantity.
    """

    model_config = ConfigDict(extra="forbid")

    video_card_id: uuid.UUID
    change: int


class CartItemRead(SQLModel):
    """
    Read model for a single cart line, priced at the live catalog price.
    """

    id: uuid.UUID
    video_card_id: uuid.UUID
    model_name: str
    image_url: str | None = None
    unit_price: float
    quantity: int
    line_total: float


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartItemRead]
    total_quantity: int
    total_price: float


class CartQuantityResult(SQLModel):
    """
    Result of a quantity change.

    - success=False: the card is not in the caller's cart
    - removed=True: quantity dropped to zero and the line is gone
    - otherwise the new quantity and recomputed totals
    """

    success: bool
    removed: bool = False
    new_quantity: int | None = None
    item_total: float | None = None
    cart_total: float | None = None
