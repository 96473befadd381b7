# gpustore/schemas/admin.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class AdminDashboardStats(SQLModel):
    """
    Headline numbers for the admin home page.
    """

    model_config = ConfigDict(extra="forbid")

    total_video_cards: int
    total_orders: int
    total_manufacturers: int
    total_revenue: float


class AdminActionResult(SQLModel):
    """
    Outcome of a bulk back-office action (seed / clear).
    """

    success: bool
    message: str
