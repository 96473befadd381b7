# gpustore/models/comment.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Comment(SQLModel, table=True):
    __tablename__ = "comments"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    content: str = Field(
        max_length=2000,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )

    video_card_id: uuid.UUID = Field(
        foreign_key="video_cards.id",
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )
