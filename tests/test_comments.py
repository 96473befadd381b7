import uuid
from datetime import datetime, timedelta, timezone

from sqlmodel import select

from gpustore.models.comment import Comment

CARDS_URL = "/api/v1/video-cards"


class TestComments:
    def test_customer_comment_shows_on_details(
        self, client, customer, customer_headers, make_card
    ):
        card = make_card()

        response = client.post(
            f"{CARDS_URL}/{card.id}/comments",
            json={"content": "  Runs cool and quiet.  "},
            headers=customer_headers,
        )

        assert response.status_code == 200
        [comment] = response.json()["comments"]
        assert comment["content"] == "Runs cool and quiet."
        assert comment["author_email"] == customer.email

    def test_blank_comment_is_ignored(self, client, session, customer_headers, make_card):
        card = make_card()

        response = client.post(
            f"{CARDS_URL}/{card.id}/comments",
            json={"content": "   "},
            headers=customer_headers,
        )

        assert response.status_code == 200
        assert response.json()["comments"] == []
        assert session.exec(select(Comment)).all() == []

    def test_newest_first(self, client, session, customer, make_card):
        card = make_card()
        now = datetime.now(timezone.utc)
        session.add_all(
            [
                Comment(
                    content="older",
                    video_card_id=card.id,
                    user_id=customer.id,
                    created_at=now - timedelta(hours=1),
                ),
                Comment(
                    content="newer",
                    video_card_id=card.id,
                    user_id=customer.id,
                    created_at=now,
                ),
            ]
        )
        session.commit()

        body = client.get(f"{CARDS_URL}/{card.id}").json()

        assert [c["content"] for c in body["comments"]] == ["newer", "older"]

    def test_too_long_comment_is_rejected(self, client, customer_headers, make_card):
        card = make_card()

        response = client.post(
            f"{CARDS_URL}/{card.id}/comments",
            json={"content": "x" * 2001},
            headers=customer_headers,
        )

        assert response.status_code == 422

    def test_admin_cannot_comment(self, client, session, admin_headers, make_card):
        card = make_card()

        response = client.post(
            f"{CARDS_URL}/{card.id}/comments",
            json={"content": "Admin note"},
            headers=admin_headers,
        )

        assert response.status_code == 403
        assert session.exec(select(Comment)).all() == []

    def test_anonymous_cannot_comment(self, client, make_card):
        card = make_card()
        response = client.post(f"{CARDS_URL}/{card.id}/comments", json={"content": "hi"})
        assert response.status_code == 401

    def test_unknown_card_is_404(self, client, customer_headers):
        response = client.post(
            f"{CARDS_URL}/{uuid.uuid4()}/comments",
            json={"content": "hello"},
            headers=customer_headers,
        )
        assert response.status_code == 404
