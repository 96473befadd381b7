# gpustore/schemas/order.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel

from gpustore.models.order import OrderStatus


class OrderRead(SQLModel):
    """
    Lightweight representation of an order (without items).
    """

    id: uuid.UUID
    user_id: uuid.UUID
    order_date: datetime
    status: OrderStatus
    total_price: float


class OrderAdminRead(OrderRead):
    """
    Row of the admin order list.
    """

    customer_email: str | None = None
    item_count: int


class OrderItemRead(SQLModel):
    """
    Representation of a single order line item.
    """

    id: uuid.UUID
    order_id: uuid.UUID
    video_card_id: uuid.UUID
    model_name: str | None = None
    quantity: int
    price_at_purchase: float
    line_total: float


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items.
    """

    customer_email: str | None = None
    items: list[OrderItemRead]


class OrderStatusUpdate(SQLModel):
    """
    Admin payload to change order status.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
