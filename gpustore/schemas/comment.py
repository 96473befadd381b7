# gpustore/schemas/comment.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class CommentCreate(SQLModel):
    """
    Payload for posting a comment.

    Blank content is accepted here and ignored by the service.
    """

    model_config = ConfigDict(extra="forbid")

    content: str = Field(default="", max_length=2000)


class CommentRead(SQLModel):
    id: uuid.UUID
    content: str
    created_at: datetime
    user_id: uuid.UUID
    author_email: str | None = None
