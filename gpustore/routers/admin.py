# gpustore/routers/admin.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from gpustore.core.auth import require_admin
from gpustore.database import get_session
from gpustore.repositories.admin_repo import AdminRepository
from gpustore.repositories.manufacturer_repo import ManufacturerRepository
from gpustore.repositories.order_repo import OrderRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.admin import AdminActionResult, AdminDashboardStats
from gpustore.services.admin_service import AdminService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

service = AdminService(
    AdminRepository(),
    VideoCardRepository(),
    ManufacturerRepository(),
    OrderRepository(),
)


@router.get("/dashboard", response_model=AdminDashboardStats)
def get_dashboard(session: Session = Depends(get_session)):
    """
    Headline numbers for the admin home page.
    """
    return service.get_dashboard(session)


@router.post("/seed", response_model=AdminActionResult)
def seed_demo_data(session: Session = Depends(get_session)):
    """
    Load demo manufacturers, technologies and video cards.

    Safe to call repeatedly: tables that already hold data are skipped.
    """
    return service.seed_demo_data(session)


@router.post("/clear", response_model=AdminActionResult)
def clear_all_data(session: Session = Depends(get_session)):
    """
    Delete ALL catalog, cart, comment and order data. Irreversible.

    Failures are reported in the body (success=false), not as 5xx.
    """
    return service.clear_all_data(session)
