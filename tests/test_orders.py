import uuid

import pytest
from sqlmodel import select

from gpustore.models.cart import CartItem
from gpustore.models.order import Order, OrderItem
from gpustore.routers import orders as orders_router

CART_URL = "/api/v1/cart"
CHECKOUT_URL = "/api/v1/orders/checkout"
ORDERS_URL = "/api/v1/orders"


@pytest.fixture
def filled_cart(client, customer_headers, make_card):
    """Two lines: 2 x 100.00 and 1 x 50.00."""
    first = make_card(model_name="GeForce RTX 4070 Ti", price=100.0)
    second = make_card(model_name="Radeon RX 7600", price=50.0)
    client.post(
        CART_URL,
        json={"video_card_id": str(first.id), "quantity": 2},
        headers=customer_headers,
    )
    client.post(CART_URL, json={"video_card_id": str(second.id)}, headers=customer_headers)
    return first, second


def _checkout(client, headers) -> dict:
    response = client.post(CHECKOUT_URL, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestCheckout:
    def test_preview_shows_cart(self, client, customer_headers, filled_cart):
        response = client.get(CHECKOUT_URL, headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["total_price"] == 250.0

    def test_creates_pending_order_and_empties_cart(
        self, client, session, customer, customer_headers, filled_cart
    ):
        order = _checkout(client, customer_headers)

        assert order["status"] == "pending"
        assert order["total_price"] == 250.0
        assert order["user_id"] == str(customer.id)
        prices = sorted((i["price_at_purchase"], i["quantity"]) for i in order["items"])
        assert prices == [(50.0, 1), (100.0, 2)]

        assert session.exec(select(CartItem).where(CartItem.user_id == customer.id)).all() == []
        assert len(session.exec(select(Order)).all()) == 1

    def test_price_change_does_not_touch_placed_order(
        self, client, session, customer_headers, filled_cart
    ):
        first, _ = filled_cart
        order = _checkout(client, customer_headers)

        first.price = 999.0
        session.add(first)
        session.commit()

        response = client.get(f"{ORDERS_URL}/me/{order['id']}", headers=customer_headers)
        body = response.json()
        line = next(i for i in body["items"] if i["video_card_id"] == str(first.id))
        assert line["price_at_purchase"] == 100.0
        assert line["line_total"] == 200.0
        assert body["total_price"] == 250.0

    def test_empty_cart_redirects_to_cart_without_order(
        self, client, session, customer_headers
    ):
        response = client.post(CHECKOUT_URL, headers=customer_headers, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == CART_URL
        assert session.exec(select(Order)).all() == []

    def test_empty_cart_preview_redirects_to_cart(self, client, customer_headers):
        response = client.get(CHECKOUT_URL, headers=customer_headers, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == CART_URL

    def test_admin_is_redirected_home(self, client, session, admin_headers):
        response = client.post(CHECKOUT_URL, headers=admin_headers, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert session.exec(select(Order)).all() == []

    def test_failure_rolls_back_everything(
        self, client, session, customer, customer_headers, filled_cart, monkeypatch
    ):
        def boom(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(orders_router.order_repo, "create_items", boom)

        with pytest.raises(RuntimeError):
            client.post(CHECKOUT_URL, headers=customer_headers)

        assert session.exec(select(Order)).all() == []
        assert session.exec(select(OrderItem)).all() == []
        cart = session.exec(select(CartItem).where(CartItem.user_id == customer.id)).all()
        assert len(cart) == 2


class TestCustomerOrders:
    def test_lists_only_own_orders(
        self, client, customer_headers, other_customer, filled_cart
    ):
        order = _checkout(client, customer_headers)

        response = client.get(f"{ORDERS_URL}/me", headers=customer_headers)

        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [order["id"]]

    def test_foreign_order_is_404(
        self, client, customer_headers, other_customer, headers_for, filled_cart
    ):
        order = _checkout(client, customer_headers)

        response = client.get(
            f"{ORDERS_URL}/me/{order['id']}", headers=headers_for(other_customer)
        )
        assert response.status_code == 404

    def test_admin_history_view_redirects_to_all_orders(self, client, admin_headers):
        response = client.get(f"{ORDERS_URL}/me", headers=admin_headers, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == ORDERS_URL


class TestAdminOrders:
    def test_list_includes_customer_and_line_count(
        self, client, customer, customer_headers, admin_headers, filled_cart
    ):
        _checkout(client, customer_headers)

        response = client.get(ORDERS_URL, headers=admin_headers)

        assert response.status_code == 200
        [row] = response.json()
        assert row["customer_email"] == customer.email
        assert row["item_count"] == 2

    def test_customer_cannot_list_all(self, client, customer_headers):
        assert client.get(ORDERS_URL, headers=customer_headers).status_code == 403

    def test_get_any_order(self, client, customer, customer_headers, admin_headers, filled_cart):
        order = _checkout(client, customer_headers)

        response = client.get(f"{ORDERS_URL}/{order['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["customer_email"] == customer.email
        assert len(response.json()["items"]) == 2

    def test_unknown_order_is_404(self, client, admin_headers):
        response = client.get(f"{ORDERS_URL}/{uuid.uuid4()}", headers=admin_headers)
        assert response.status_code == 404


class TestStatusTransitions:
    def _set(self, client, headers, order_id, new_status):
        return client.patch(
            f"{ORDERS_URL}/{order_id}/status",
            json={"status": new_status},
            headers=headers,
        )

    def test_happy_path_to_shipped(self, client, customer_headers, admin_headers, filled_cart):
        order = _checkout(client, customer_headers)

        assert self._set(client, admin_headers, order["id"], "processed").json()["status"] == "processed"
        assert self._set(client, admin_headers, order["id"], "shipped").json()["status"] == "shipped"

    def test_pending_cannot_jump_to_shipped(
        self, client, customer_headers, admin_headers, filled_cart
    ):
        order = _checkout(client, customer_headers)

        response = self._set(client, admin_headers, order["id"], "shipped")

        assert response.status_code == 400

    @pytest.mark.parametrize("terminal", ["cancelled", "shipped"])
    def test_terminal_states_are_final(
        self, client, customer_headers, admin_headers, filled_cart, terminal
    ):
        order = _checkout(client, customer_headers)
        if terminal == "shipped":
            self._set(client, admin_headers, order["id"], "processed")
        self._set(client, admin_headers, order["id"], terminal)

        response = self._set(client, admin_headers, order["id"], "pending")

        assert response.status_code == 400

    def test_same_status_is_a_no_op(self, client, customer_headers, admin_headers, filled_cart):
        order = _checkout(client, customer_headers)

        response = self._set(client, admin_headers, order["id"], "pending")

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_unknown_status_is_rejected(
        self, client, customer_headers, admin_headers, filled_cart
    ):
        order = _checkout(client, customer_headers)

        response = self._set(client, admin_headers, order["id"], "lost")

        assert response.status_code == 422

    def test_customer_cannot_change_status(self, client, customer_headers, filled_cart):
        order = _checkout(client, customer_headers)

        response = self._set(client, customer_headers, order["id"], "cancelled")

        assert response.status_code == 403
