# gpustore/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from gpustore.core.auth import redirect_admin, require_admin
from gpustore.core.config import get_settings
from gpustore.database import get_session
from gpustore.models.user import User
from gpustore.repositories.cart_repo import CartRepository
from gpustore.repositories.order_repo import OrderRepository
from gpustore.repositories.user_repo import UserRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.cart import CartSummary
from gpustore.schemas.order import (
    OrderAdminRead,
    OrderRead,
    OrderStatusUpdate,
    OrderWithItemsRead,
)
from gpustore.services.cart_service import CartService
from gpustore.services.order_service import OrderService

settings = get_settings()

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
cart_repo = CartRepository()
user_repo = UserRepository()
service = OrderService(order_repo, cart_repo, user_repo)
cart_service = CartService(cart_repo, VideoCardRepository())

CART_URL = f"{settings.API_V1_STR}/cart"
ADMIN_ORDERS_URL = f"{settings.API_V1_STR}/orders"


def _back_to_cart() -> RedirectResponse:
    return RedirectResponse(url=CART_URL, status_code=status.HTTP_303_SEE_OTHER)


# -------- Customer endpoints --------


@router.get("/checkout", response_model=CartSummary)
def checkout_preview(
    session: Session = Depends(get_session),
    current_user: User = Depends(redirect_admin()),
):
    """
    Review the cart before confirming.

    - Admins are redirected to the home view.
    - An empty cart redirects back to the cart view.
    """
    summary = cart_service.get_cart_summary(session, current_user.id)
    if not summary.items:
        return _back_to_cart()
    return summary


@router.post(
    "/checkout",
    response_model=OrderWithItemsRead,
    status_code=status.HTTP_201_CREATED,
)
def confirm_order(
    session: Session = Depends(get_session),
    current_user: User = Depends(redirect_admin()),
):
    """
    Create an order from the current user's cart.

    Prices are frozen at their current values and the cart is emptied,
    all in one transaction. An empty cart creates nothing and redirects
    back to the cart view.
    """
    order = service.create_order_from_cart(session, current_user.id)
    if order is None:
        return _back_to_cart()
    return order


@router.get("/me", response_model=list[OrderRead])
def list_my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(redirect_admin(ADMIN_ORDERS_URL)),
):
    """
    List the authenticated user's orders (without items), newest first.

    Admins are redirected to the full order list.
    """
    return service.list_user_orders(session, current_user.id)


@router.get("/me/{order_id}", response_model=OrderWithItemsRead)
def get_my_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(redirect_admin(ADMIN_ORDERS_URL)),
):
    """
    Get a single order (with items) belonging to the current user.
    """
    return service.get_user_order(session, current_user.id, order_id)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[OrderAdminRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(session: Session = Depends(get_session)):
    """
    List all orders, newest first (admin only).
    """
    return service.list_all_orders(session)


@router.get(
    "/{order_id}",
    response_model=OrderWithItemsRead,
    dependencies=[Depends(require_admin)],
)
def get_order_admin(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get any order with items and customer email (admin only).
    """
    return service.get_order_admin(session, order_id)


@router.patch(
    "/{order_id}/status",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Update order status (admin only) with simple state machine.

      pending   -> processed, cancelled

      processed -> shipped, cancelled

      shipped   -> (no change)

      cancelled -> (no change)

    """
    return service.update_status(session, order_id, payload)
