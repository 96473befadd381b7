# gpustore/schemas/user.py
import uuid
from datetime import datetime

from pydantic import EmailStr
from sqlmodel import SQLModel

from gpustore.models.user import Role


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    email: EmailStr
    name: str
    role: Role
    created_at: datetime
