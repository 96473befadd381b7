# gpustore/routers/technologies.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from gpustore.core.auth import require_admin
from gpustore.database import get_session
from gpustore.repositories.technology_repo import TechnologyRepository
from gpustore.schemas.catalog import TechnologyCreate, TechnologyRead, TechnologyUpdate
from gpustore.services.technology_service import TechnologyService

router = APIRouter(
    prefix="/technologies",
    tags=["Technologies"],
    dependencies=[Depends(require_admin)],
)

repo = TechnologyRepository()
service = TechnologyService(repo)


@router.get("", response_model=list[TechnologyRead])
def list_technologies(session: Session = Depends(get_session)):
    """
    List technologies sorted by name.

    Also the source of the checkbox list on the video card form.
    """
    return service.list_technologies(session)


@router.get("/{technology_id}", response_model=TechnologyRead)
def get_technology(
    technology_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_technology(session, technology_id)


@router.post(
    "",
    response_model=TechnologyRead,
    status_code=status.HTTP_201_CREATED,
)
def create_technology(
    payload: TechnologyCreate,
    session: Session = Depends(get_session),
):
    return service.create_technology(session, payload)


@router.put("/{technology_id}", response_model=TechnologyRead)
def update_technology(
    technology_id: uuid.UUID,
    payload: TechnologyUpdate,
    session: Session = Depends(get_session),
):
    return service.update_technology(session, technology_id, payload)


@router.delete("/{technology_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_technology(
    technology_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a technology; cards simply lose the link.
    """
    service.delete_technology(session, technology_id)
    return None
