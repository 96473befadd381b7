# gpustore/models/catalog.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Manufacturer(SQLModel, table=True):
    """
    Video card manufacturer (chip vendor or board partner).
    """

    __tablename__ = "manufacturers"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        min_length=2,
        max_length=50,
        unique=True,
        index=True,
        description="Manufacturer name (unique)",
    )


class Technology(SQLModel, table=True):
    """
    Feature a card can support (Ray Tracing, DLSS, FreeSync, ...).
    """

    __tablename__ = "technologies"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        min_length=2,
        max_length=50,
        unique=True,
        index=True,
        description="Technology name (unique)",
    )


class VideoCard(SQLModel, table=True):
    """
    Product catalog entry.

    model_name is unique per manufacturer, not globally.
    image_url holds the stored filename only; files are served
    from the static images directory.
    """

    __tablename__ = "video_cards"
    __table_args__ = (
        UniqueConstraint("model_name", "manufacturer_id", name="uq_video_card_model_manufacturer"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    model_name: str = Field(
        min_length=2,
        max_length=100,
        index=True,
        description="Display name of the card model",
    )

    price: float = Field(
        gt=0,
        le=20000,
        description="Current unit price",
    )

    manufacturer_id: uuid.UUID = Field(
        foreign_key="manufacturers.id",
        index=True,
    )

    image_url: str | None = Field(
        default=None,
        description="Stored image filename",
    )

    description: str | None = Field(
        default=None,
        max_length=2000,
    )

    added_by_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="users.id",
        description="Admin who created the card",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class CardTechnology(SQLModel, table=True):
    """
    Association between a video card and a technology.
    The composite key allows at most one link per pair.
    """

    __tablename__ = "card_technologies"

    video_card_id: uuid.UUID = Field(
        foreign_key="video_cards.id",
        primary_key=True,
    )

    technology_id: uuid.UUID = Field(
        foreign_key="technologies.id",
        primary_key=True,
    )
