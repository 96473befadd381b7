# gpustore/schemas/catalog.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from gpustore.schemas.comment import CommentRead


def _strip(v):
    return v.strip() if isinstance(v, str) else v


# -------- Manufacturers --------


class ManufacturerCreate(SQLModel):
    """
    Payload for creating or renaming a manufacturer.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=2, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v):
        return _strip(v)


class ManufacturerUpdate(ManufacturerCreate):
    pass


class ManufacturerRead(SQLModel):
    id: uuid.UUID
    name: str


# -------- Technologies --------


class TechnologyCreate(SQLModel):
    """
    Payload for creating or renaming a technology.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=2, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v):
        return _strip(v)


class TechnologyUpdate(TechnologyCreate):
    pass


class TechnologyRead(SQLModel):
    id: uuid.UUID
    name: str


# -------- Video cards --------


class VideoCardCreate(SQLModel):
    """
    Payload for creating a video card.

    technology_ids are the ticked technology checkboxes; each id
    becomes one card<->technology link.
    """

    model_config = ConfigDict(extra="forbid")

    model_name: str = Field(min_length=2, max_length=100)
    price: float = Field(gt=0, le=20000)
    manufacturer_id: uuid.UUID
    description: str | None = Field(default=None, max_length=2000)
    technology_ids: list[uuid.UUID] = Field(default_factory=list)

    @field_validator("model_name", mode="before")
    @classmethod
    def normalize_model_name(cls, v):
        return _strip(v)

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, v):
        v = _strip(v)
        return v or None

    @field_validator("technology_ids")
    @classmethod
    def dedupe_technologies(cls, v: list[uuid.UUID]) -> list[uuid.UUID]:
        return list(dict.fromkeys(v))


class VideoCardUpdate(VideoCardCreate):
    """
    Full replacement payload for editing a card.

    The image and the creator are never changed through this payload;
    the technology selection replaces the current one entirely.
    """

    pass


class VideoCardRead(SQLModel):
    """
    Video card with its manufacturer and technologies resolved.
    """

    id: uuid.UUID
    model_name: str
    price: float
    manufacturer_id: uuid.UUID
    manufacturer_name: str | None = None
    image_url: str | None = None
    description: str | None = None
    added_by_id: uuid.UUID | None = None
    created_at: datetime
    technologies: list[TechnologyRead] = []


class VideoCardDetails(VideoCardRead):
    """
    Public details page: card plus its comments (newest first).
    """

    comments: list[CommentRead] = []


class CatalogPage(SQLModel):
    """
    Public catalog listing.

    Echoes the active filter and carries the manufacturer list
    for the filter dropdown.
    """

    items: list[VideoCardRead]
    manufacturers: list[ManufacturerRead]
    search: str | None = None
    manufacturer_id: uuid.UUID | None = None
