import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone

import pytest

# Settings are read at import time, so the test environment must be in
# place before anything from gpustore is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ADMIN_EMAILS", '["boss@gpustore.com"]')
os.environ.setdefault("STATIC_DIR", tempfile.mkdtemp(prefix="gpustore-static-"))

from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from gpustore.database import get_session  # noqa: E402
from gpustore.main import app  # noqa: E402
from gpustore.models.catalog import (  # noqa: E402
    CardTechnology,
    Manufacturer,
    Technology,
    VideoCard,
)
from gpustore.models.user import Role, User  # noqa: E402


def make_token(user_id: uuid.UUID | str, email: str, secret: str = "test-secret") -> str:
    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user.id, user.email)}"}


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _create_user(session: Session, email: str, role: Role) -> User:
    user = User(id=uuid.uuid4(), email=email, name=email.split("@")[0], role=role.value)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def customer(session: Session) -> User:
    return _create_user(session, "ivan@gpustore.com", Role.CUSTOMER)


@pytest.fixture
def other_customer(session: Session) -> User:
    return _create_user(session, "maria@gpustore.com", Role.CUSTOMER)


@pytest.fixture
def admin(session: Session) -> User:
    return _create_user(session, "admin@gpustore.com", Role.ADMIN)


@pytest.fixture
def customer_headers(customer: User) -> dict[str, str]:
    return auth_headers(customer)


@pytest.fixture
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def make_manufacturer(session: Session):
    def _make(name: str = "NVIDIA") -> Manufacturer:
        manufacturer = Manufacturer(name=name)
        session.add(manufacturer)
        session.commit()
        session.refresh(manufacturer)
        return manufacturer

    return _make


@pytest.fixture
def make_technology(session: Session):
    def _make(name: str) -> Technology:
        technology = Technology(name=name)
        session.add(technology)
        session.commit()
        session.refresh(technology)
        return technology

    return _make


@pytest.fixture
def make_card(session: Session, make_manufacturer):
    def _make(
        model_name: str = "GeForce RTX 4090",
        price: float = 100.0,
        manufacturer: Manufacturer | None = None,
        technologies: list[Technology] | None = None,
    ) -> VideoCard:
        if manufacturer is None:
            manufacturer = make_manufacturer(f"Maker {uuid.uuid4().hex[:8]}")
        card = VideoCard(
            model_name=model_name,
            price=price,
            manufacturer_id=manufacturer.id,
        )
        session.add(card)
        session.commit()
        for tech in technologies or []:
            session.add(CardTechnology(video_card_id=card.id, technology_id=tech.id))
        session.commit()
        session.refresh(card)
        return card

    return _make


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def token_for():
    return make_token
