# gpustore/models/order.py
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


# Admin status changes must follow this table.
ALLOWED_STATUS_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSED, OrderStatus.CANCELLED},
    OrderStatus.PROCESSED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: set(),
    OrderStatus.CANCELLED: set(),
}


class Order(SQLModel, table=True):
    """
    Confirmed purchase.

    Only `status` may change after creation; total_price is
    computed once at checkout and never recomputed.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    order_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Checkout timestamp (UTC)",
    )

    # pending | processed | shipped | cancelled
    status: str = Field(
        default=OrderStatus.PENDING.value,
        index=True,
        description="Order status lifecycle",
    )

    total_price: float = Field(
        description="Sum of quantity x price_at_purchase",
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.
    """

    __tablename__ = "order_items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
    )

    video_card_id: uuid.UUID = Field(
        foreign_key="video_cards.id",
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    price_at_purchase: float = Field(
        description="Unit price frozen at checkout",
    )
