# gpustore/services/cart_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from gpustore.models.cart import CartItem
from gpustore.models.catalog import VideoCard
from gpustore.repositories.cart_repo import CartRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.cart import (
    CartItemCreate,
    CartItemRead,
    CartQuantityChange,
    CartQuantityResult,
    CartSummary,
)


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - keep one row per (user, video card), merging repeated adds
      - drop a line once its quantity reaches zero
      - price lines at the live catalog price
      - make sure a user can only touch their own lines

    Admins never reach this service (router dependencies).
    """

    def __init__(self, cart_repo: CartRepository, card_repo: VideoCardRepository):
        self.cart_repo = cart_repo
        self.card_repo = card_repo

    # ---- internal helpers ----

    def _get_card(self, session: Session, card_id: uuid.UUID) -> VideoCard:
        card = self.card_repo.get_by_id(session, card_id)
        if not card:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Video card not found",
            )
        return card

    @staticmethod
    def _money(value: float) -> float:
        return round(value, 2)

    # ---- public operations ----

    def get_cart_summary(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead (with line_total)
          - total_quantity
          - total_price
        """
        rows = self.cart_repo.list_with_cards(session, user_id)

        item_reads: list[CartItemRead] = []
        total_qty = 0
        total_price = 0.0

        for item, card in rows:
            line_total = item.quantity * card.price
            total_qty += item.quantity
            total_price += line_total

            item_reads.append(
                CartItemRead(
                    id=item.id,
                    video_card_id=card.id,
                    model_name=card.model_name,
                    image_url=card.image_url,
                    unit_price=card.price,
                    quantity=item.quantity,
                    line_total=self._money(line_total),
                )
            )

        return CartSummary(
            items=item_reads,
            total_quantity=total_qty,
            total_price=self._money(total_price),
        )

    def add_to_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: CartItemCreate,
    ) -> CartSummary:
        """
        Add a video card to the user's cart.

        Adding a card that is already in the cart increases the
        existing line instead of creating a second one.
        """
        self._get_card(session, payload.video_card_id)

        existing = self.cart_repo.get_item(session, user_id, payload.video_card_id)

        if existing:
            existing.quantity += payload.quantity
            self.cart_repo.update(session, existing)
        else:
            item = CartItem(
                user_id=user_id,
                video_card_id=payload.video_card_id,
                quantity=payload.quantity,
            )
            self.cart_repo.create(session, item)

        return self.get_cart_summary(session, user_id)

    def change_quantity(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: CartQuantityChange,
    ) -> CartQuantityResult:
        """
        Apply a +/- delta to a cart line.

        If the new quantity is <= 0 the line is deleted and the result
        only says so; otherwise it carries the new line and cart totals.
        """
        item = self.cart_repo.get_item(session, user_id, payload.video_card_id)
        if not item:
            return CartQuantityResult(success=False)

        new_quantity = item.quantity + payload.change

        if new_quantity <= 0:
            self.cart_repo.delete(session, item)
            return CartQuantityResult(success=True, removed=True)

        item.quantity = new_quantity
        self.cart_repo.update(session, item)

        card = self._get_card(session, payload.video_card_id)
        summary = self.get_cart_summary(session, user_id)

        return CartQuantityResult(
            success=True,
            removed=False,
            new_quantity=new_quantity,
            item_total=self._money(new_quantity * card.price),
            cart_total=summary.total_price,
        )

    def remove_item(
        self,
        session: Session,
        user_id: uuid.UUID,
        item_id: uuid.UUID,
    ) -> CartSummary:
        """
        Remove a cart line by id and return the updated summary.

        Lines belonging to someone else are reported as missing.
        """
        item = self.cart_repo.get_by_id(session, item_id)
        if not item or item.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Item not found in cart",
            )

        self.cart_repo.delete(session, item)
        return self.get_cart_summary(session, user_id)

    def clear_cart(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> CartSummary:
        """
        Clear all items from the cart and return an empty summary.
        """
        self.cart_repo.clear_user_cart(session, user_id)
        return CartSummary(items=[], total_quantity=0, total_price=0.0)
