import uuid

from sqlmodel import select

from gpustore.models.user import User

ME_URL = "/api/v1/users/me"


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestCurrentUser:
    def test_first_request_provisions_a_customer(self, client, session, token_for):
        user_id = uuid.uuid4()

        response = client.get(ME_URL, headers=_bearer(token_for(user_id, "new.buyer@gpustore.com")))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(user_id)
        assert body["role"] == "customer"
        assert body["name"] == "new.buyer"
        assert session.get(User, user_id) is not None

    def test_listed_email_is_provisioned_as_admin(self, client, token_for):
        response = client.get(
            ME_URL, headers=_bearer(token_for(uuid.uuid4(), "Boss@GPUStore.com"))
        )

        assert response.json()["role"] == "admin"

    def test_existing_profile_is_reused(self, client, session, customer, customer_headers):
        client.get(ME_URL, headers=customer_headers)
        response = client.get(ME_URL, headers=customer_headers)

        assert response.json()["id"] == str(customer.id)
        assert len(session.exec(select(User)).all()) == 1

    def test_missing_token_is_401(self, client):
        assert client.get(ME_URL).status_code == 401

    def test_bad_signature_is_401(self, client, token_for):
        token = token_for(uuid.uuid4(), "x@gpustore.com", secret="not-the-secret")
        assert client.get(ME_URL, headers=_bearer(token)).status_code == 401

    def test_non_uuid_subject_is_401(self, client, token_for):
        token = token_for("auth0|12345", "x@gpustore.com")
        assert client.get(ME_URL, headers=_bearer(token)).status_code == 401


class TestHome:
    def test_home_is_public(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
