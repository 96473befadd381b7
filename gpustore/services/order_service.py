# gpustore/services/order_service.py
import logging
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from gpustore.models.order import (
    ALLOWED_STATUS_TRANSITIONS,
    Order,
    OrderItem,
    OrderStatus,
)
from gpustore.repositories.cart_repo import CartRepository
from gpustore.repositories.order_repo import OrderRepository
from gpustore.repositories.user_repo import UserRepository
from gpustore.schemas.order import (
    OrderAdminRead,
    OrderItemRead,
    OrderRead,
    OrderStatusUpdate,
    OrderWithItemsRead,
)

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from cart (one transaction)
      - Freeze each line's unit price at checkout
      - Clear cart after success
      - Enforce status transitions (admin)
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        user_repo: UserRepository,
    ):
        self.order_repo = order_repo
        self.cart_repo = cart_repo
        self.user_repo = user_repo

    # -------- User-facing operations --------

    def create_order_from_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> OrderWithItemsRead | None:
        """
        Convert the current user's cart into an Order.

        Steps:
          1. Load cart lines with their card's current price.
             Empty cart => None (caller sends the user back to the cart).
          2. Create Order row (status='pending', total from live prices).
          3. Create OrderItem rows, freezing price_at_purchase.
          4. Delete the cart lines.
          5. Commit 2-4 together; roll everything back on failure.
        """
        rows = self.cart_repo.list_with_cards(session, user_id)
        if not rows:
            return None

        total_price = round(sum(item.quantity * card.price for item, card in rows), 2)
        names = {card.id: card.model_name for _, card in rows}

        try:
            order = Order(
                user_id=user_id,
                order_date=datetime.now(timezone.utc),
                status=OrderStatus.PENDING.value,
                total_price=total_price,
            )
            order = self.order_repo.create_order(session, order)

            order_items = [
                OrderItem(
                    order_id=order.id,
                    video_card_id=card.id,
                    quantity=item.quantity,
                    price_at_purchase=card.price,
                )
                for item, card in rows
            ]
            order_items = self.order_repo.create_items(session, order_items)

            for item, _ in rows:
                session.delete(item)

            session.commit()
        except Exception:
            session.rollback()
            logger.exception("Checkout failed for user %s, transaction rolled back", user_id)
            raise

        session.refresh(order)
        logger.info(
            "Order %s created for user %s: %d line(s), total %.2f",
            order.id,
            user_id,
            len(order_items),
            order.total_price,
        )

        return self._build_order_with_items_dto(
            order,
            [(it, names.get(it.video_card_id)) for it in order_items],
        )

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[OrderRead]:
        """
        List orders for the given user (without items), newest first.
        """
        orders = self.order_repo.list_for_user(session, user_id)
        return orders  # type: ignore[return-value]

    def get_user_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> OrderWithItemsRead:
        """
        Get a single order for the user, including items.

        - 404 if order not found or does not belong to this user.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order or order.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )

        items = self.order_repo.list_items_with_cards(session, order.id)
        return self._build_order_with_items_dto(order, items)

    # -------- Admin operations --------

    def list_all_orders(self, session: Session) -> list[OrderAdminRead]:
        """
        List all orders with customer email and line count (admin only).
        """
        return [
            OrderAdminRead(
                id=order.id,
                user_id=order.user_id,
                order_date=order.order_date,
                status=order.status,
                total_price=order.total_price,
                customer_email=email,
                item_count=int(item_count or 0),
            )
            for order, email, item_count in self.order_repo.list_all_with_customers(session)
        ]

    def get_order_admin(
        self,
        session: Session,
        order_id: uuid.UUID,
    ) -> OrderWithItemsRead:
        """
        Get any order with items and the customer's email (admin only).
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        items = self.order_repo.list_items_with_cards(session, order.id)
        customer = self.user_repo.get_by_id(session, order.user_id)
        return self._build_order_with_items_dto(
            order,
            items,
            customer_email=customer.email if customer else None,
        )

    def update_status(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> OrderRead:
        """
        Admin-only status update with a simple state machine:

          pending   -> processed, cancelled
          processed -> shipped, cancelled
          shipped   -> (no change)
          cancelled -> (no change)

        Any invalid transition raises 400.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )

        current = OrderStatus(order.status)
        new = payload.status

        if current == new:
            return order  # type: ignore[return-value]

        if new not in ALLOWED_STATUS_TRANSITIONS[current]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status transition: {current.value} -> {new.value}",
            )

        order.status = new.value
        self.order_repo.update_order(session, order)
        session.commit()
        session.refresh(order)
        logger.info("Order %s status changed %s -> %s", order.id, current.value, new.value)
        return order  # type: ignore[return-value]

    # -------- Helper DTO builder --------

    def _build_order_with_items_dto(
        self,
        order: Order,
        items: list[tuple[OrderItem, str | None]],
        customer_email: str | None = None,
    ) -> OrderWithItemsRead:
        """
        Compose OrderWithItemsRead from ORM models.

        Line totals use the frozen price_at_purchase, never the live price.
        """
        item_dtos = [
            OrderItemRead(
                id=it.id,
                order_id=it.order_id,
                video_card_id=it.video_card_id,
                model_name=model_name,
                quantity=it.quantity,
                price_at_purchase=it.price_at_purchase,
                line_total=round(it.quantity * it.price_at_purchase, 2),
            )
            for it, model_name in items
        ]

        return OrderWithItemsRead(
            id=order.id,
            user_id=order.user_id,
            order_date=order.order_date,
            status=order.status,
            total_price=order.total_price,
            customer_email=customer_email,
            items=item_dtos,
        )
