# gpustore/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gpustore.core.auth import redirect_admin, require_customer
from gpustore.database import get_session
from gpustore.models.user import User
from gpustore.repositories.cart_repo import CartRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.cart import (
    CartItemCreate,
    CartQuantityChange,
    CartQuantityResult,
    CartSummary,
)
from gpustore.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
card_repo = VideoCardRepository()
service = CartService(cart_repo, card_repo)


@router.get("", response_model=CartSummary)
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(redirect_admin()),
):
    """
    Get current user's cart summary.

    Auth:
      - Customers only.
      - Admins have no cart and are redirected (303) to the home view.
    """
    return service.get_cart_summary(session, current_user.id)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Add a video card to the current user's cart (quantity defaults to 1).

    Returns the updated cart summary.
    """
    return service.add_to_cart(session, current_user.id, payload)


@router.post("/quantity", response_model=CartQuantityResult)
def change_quantity(
    payload: CartQuantityChange,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Increase or decrease a line's quantity by `change`.

    Returns {success, removed} when the line drops to zero, otherwise
    the new quantity with updated line and cart totals.
    """
    return service.change_quantity(session, current_user.id, payload)


@router.delete("/{item_id}", response_model=CartSummary)
def remove_cart_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Remove a line from the cart by its id.

    Returns the updated cart summary.
    """
    return service.remove_item(session, current_user.id, item_id)


@router.delete("", response_model=CartSummary)
def clear_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Clear the entire cart.

    Returns an empty cart summary.
    """
    return service.clear_cart(session, current_user.id)
