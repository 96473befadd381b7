# gpustore/repositories/order_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from gpustore.models.catalog import VideoCard
from gpustore.models.order import Order, OrderItem
from gpustore.models.user import User


class OrderRepository:
    """
    Data access layer for orders and order_items.

    NOTE:
      - No commits here; order creation is a multi-step transaction.
        The service is responsible for calling session.commit().
    """

    # ---- Orders ----

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.order_date.desc())
        )
        return session.exec(stmt).all()

    def list_all_with_customers(
        self,
        session: Session,
    ) -> list[tuple[Order, str | None, int]]:
        """
        All orders newest first, each with the customer's email
        and its number of line items.
        """
        item_counts = (
            select(OrderItem.order_id, func.count(OrderItem.id).label("item_count"))
            .group_by(OrderItem.order_id)
            .subquery()
        )
        stmt = (
            select(Order, User.email, func.coalesce(item_counts.c.item_count, 0))
            .join(User, User.id == Order.user_id, isouter=True)
            .join(item_counts, item_counts.c.order_id == Order.id, isouter=True)
            .order_by(Order.order_date.desc())
        )
        return session.exec(stmt).all()

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Order)).one()

    def total_revenue(self, session: Session) -> float:
        return session.exec(select(func.coalesce(func.sum(Order.total_price), 0.0))).one()

    def create_order(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure id is populated.
        """
        session.add(order)
        session.flush()  # Assign PK
        session.refresh(order)
        return order

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    # ---- Order items ----

    def list_items_with_cards(
        self,
        session: Session,
        order_id: uuid.UUID,
    ) -> list[tuple[OrderItem, str | None]]:
        """
        Items of an order with the current model name of their card
        (None if the card has since been removed).
        """
        stmt = (
            select(OrderItem, VideoCard.model_name)
            .join(VideoCard, VideoCard.id == OrderItem.video_card_id, isouter=True)
            .where(OrderItem.order_id == order_id)
        )
        return session.exec(stmt).all()

    def create_items(
        self,
        session: Session,
        items: list[OrderItem],
    ) -> list[OrderItem]:
        session.add_all(items)
        session.flush()
        for item in items:
            session.refresh(item)
        return items
