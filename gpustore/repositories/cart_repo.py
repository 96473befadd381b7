# gpustore/repositories/cart_repo.py
import uuid

from sqlmodel import Session, select

from gpustore.models.cart import CartItem
from gpustore.models.catalog import VideoCard


class CartRepository:

    # Get items for a user
    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[CartItem]:
        stmt = select(CartItem).where(CartItem.user_id == user_id)
        return session.exec(stmt).all()

    def list_with_cards(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[tuple[CartItem, VideoCard]]:
        """
        Cart lines joined with their video card (for live prices and names).
        """
        stmt = (
            select(CartItem, VideoCard)
            .join(VideoCard, VideoCard.id == CartItem.video_card_id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.created_at)
        )
        return session.exec(stmt).all()

    def get_item(
        self, session: Session, user_id: uuid.UUID, video_card_id: uuid.UUID
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.user_id == user_id, CartItem.video_card_id == video_card_id
        )
        return session.exec(stmt).first()

    def get_by_id(self, session: Session, item_id: uuid.UUID) -> CartItem | None:
        return session.get(CartItem, item_id)

    # CRUD
    def create(self, session: Session, item: CartItem) -> CartItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def update(self, session: Session, item: CartItem) -> CartItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete(self, session: Session, item: CartItem) -> None:
        session.delete(item)
        session.commit()

    def clear_user_cart(self, session: Session, user_id: uuid.UUID) -> None:
        for row in self.list_for_user(session, user_id):
            session.delete(row)
        session.commit()
