# gpustore/routers/manufacturers.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gpustore.core.auth import require_admin
from gpustore.database import get_session
from gpustore.repositories.comment_repo import CommentRepository
from gpustore.repositories.manufacturer_repo import ManufacturerRepository
from gpustore.repositories.technology_repo import TechnologyRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.catalog import ManufacturerCreate, ManufacturerRead, ManufacturerUpdate
from gpustore.services.manufacturer_service import ManufacturerService
from gpustore.services.video_card_service import VideoCardService

# The whole manufacturer back-office is admin only.
router = APIRouter(
    prefix="/manufacturers",
    tags=["Manufacturers"],
    dependencies=[Depends(require_admin)],
)

repo = ManufacturerRepository()
card_repo = VideoCardRepository()
card_service = VideoCardService(card_repo, repo, TechnologyRepository(), CommentRepository())
service = ManufacturerService(repo, card_repo, card_service)


@router.get("", response_model=list[ManufacturerRead])
def list_manufacturers(session: Session = Depends(get_session)):
    """List manufacturers sorted by name."""
    return service.list_manufacturers(session)


@router.get("/{manufacturer_id}", response_model=ManufacturerRead)
def get_manufacturer(
    manufacturer_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_manufacturer(session, manufacturer_id)


@router.post(
    "",
    response_model=ManufacturerRead,
    status_code=status.HTTP_201_CREATED,
)
def create_manufacturer(
    payload: ManufacturerCreate,
    session: Session = Depends(get_session),
):
    """
    Create a manufacturer.

    A name already in use is rejected with a 422 on `name`.
    """
    return service.create_manufacturer(session, payload)


@router.put("/{manufacturer_id}", response_model=ManufacturerRead)
def update_manufacturer(
    manufacturer_id: uuid.UUID,
    payload: ManufacturerUpdate,
    session: Session = Depends(get_session),
):
    """
    Rename a manufacturer.
    """
    return service.update_manufacturer(session, manufacturer_id, payload)


@router.delete("/{manufacturer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_manufacturer(
    manufacturer_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a manufacturer and all of its video cards.
    """
    service.delete_manufacturer(session, manufacturer_id)
    return None
