import uuid

from sqlmodel import select

from gpustore.models.cart import CartItem

CART_URL = "/api/v1/cart"


class TestAddToCart:
    def test_adding_same_card_twice_merges_into_one_line(
        self, client, session, customer, customer_headers, make_card
    ):
        card = make_card(price=100.0)

        client.post(CART_URL, json={"video_card_id": str(card.id)}, headers=customer_headers)
        response = client.post(
            CART_URL,
            json={"video_card_id": str(card.id), "quantity": 2},
            headers=customer_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["items"]) == 1
        assert body["items"][0]["quantity"] == 3
        assert body["total_quantity"] == 3
        assert body["total_price"] == 300.0

        rows = session.exec(select(CartItem).where(CartItem.user_id == customer.id)).all()
        assert len(rows) == 1

    def test_unknown_card_is_404(self, client, customer_headers):
        response = client.post(
            CART_URL,
            json={"video_card_id": str(uuid.uuid4())},
            headers=customer_headers,
        )
        assert response.status_code == 404

    def test_non_positive_quantity_is_rejected(self, client, customer_headers, make_card):
        card = make_card()
        response = client.post(
            CART_URL,
            json={"video_card_id": str(card.id), "quantity": 0},
            headers=customer_headers,
        )
        assert response.status_code == 422

    def test_summary_uses_live_price(self, client, session, customer_headers, make_card):
        card = make_card(price=100.0)
        client.post(CART_URL, json={"video_card_id": str(card.id)}, headers=customer_headers)

        card.price = 120.0
        session.add(card)
        session.commit()

        body = client.get(CART_URL, headers=customer_headers).json()
        assert body["items"][0]["unit_price"] == 120.0
        assert body["total_price"] == 120.0


class TestChangeQuantity:
    def test_increase_returns_new_totals(self, client, customer_headers, make_card):
        card = make_card(price=50.0)
        other = make_card(model_name="Radeon RX 7600", price=10.0)
        client.post(CART_URL, json={"video_card_id": str(card.id)}, headers=customer_headers)
        client.post(CART_URL, json={"video_card_id": str(other.id)}, headers=customer_headers)

        response = client.post(
            f"{CART_URL}/quantity",
            json={"video_card_id": str(card.id), "change": 2},
            headers=customer_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["removed"] is False
        assert body["new_quantity"] == 3
        assert body["item_total"] == 150.0
        assert body["cart_total"] == 160.0

    def test_dropping_to_zero_removes_the_line(
        self, client, session, customer, customer_headers, make_card
    ):
        card = make_card()
        client.post(CART_URL, json={"video_card_id": str(card.id)}, headers=customer_headers)

        response = client.post(
            f"{CART_URL}/quantity",
            json={"video_card_id": str(card.id), "change": -1},
            headers=customer_headers,
        )

        body = response.json()
        assert body["success"] is True
        assert body["removed"] is True
        assert session.exec(select(CartItem).where(CartItem.user_id == customer.id)).all() == []

    def test_missing_line_reports_failure(self, client, customer_headers, make_card):
        card = make_card()
        response = client.post(
            f"{CART_URL}/quantity",
            json={"video_card_id": str(card.id), "change": 1},
            headers=customer_headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is False


class TestRemoveAndClear:
    def test_remove_own_line(self, client, customer_headers, make_card):
        card = make_card()
        summary = client.post(
            CART_URL, json={"video_card_id": str(card.id)}, headers=customer_headers
        ).json()
        item_id = summary["items"][0]["id"]

        response = client.delete(f"{CART_URL}/{item_id}", headers=customer_headers)

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_cannot_remove_another_users_line(
        self, client, session, customer_headers, other_customer, make_card
    ):
        card = make_card()
        foreign = CartItem(user_id=other_customer.id, video_card_id=card.id, quantity=1)
        session.add(foreign)
        session.commit()
        foreign_id = foreign.id

        response = client.delete(f"{CART_URL}/{foreign_id}", headers=customer_headers)

        assert response.status_code == 404
        assert session.get(CartItem, foreign_id) is not None

    def test_clear_cart(self, client, customer_headers, make_card):
        for name in ("GeForce RTX 4060", "Radeon RX 7600"):
            card = make_card(model_name=name)
            client.post(CART_URL, json={"video_card_id": str(card.id)}, headers=customer_headers)

        response = client.delete(CART_URL, headers=customer_headers)

        assert response.status_code == 200
        assert response.json() == {"items": [], "total_quantity": 0, "total_price": 0.0}
        assert client.get(CART_URL, headers=customer_headers).json()["items"] == []


class TestCartAccess:
    def test_anonymous_is_401(self, client):
        assert client.get(CART_URL).status_code == 401

    def test_admin_view_redirects_home(self, client, admin_headers):
        response = client.get(CART_URL, headers=admin_headers, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_admin_cannot_add(self, client, admin_headers, make_card):
        card = make_card()
        response = client.post(
            CART_URL, json={"video_card_id": str(card.id)}, headers=admin_headers
        )
        assert response.status_code == 403
