# gpustore/routers/video_cards.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    UploadFile,
    status,
)
from sqlmodel import Session

from gpustore.core.auth import require_admin, require_customer
from gpustore.database import get_session
from gpustore.models.user import User
from gpustore.repositories.comment_repo import CommentRepository
from gpustore.repositories.manufacturer_repo import ManufacturerRepository
from gpustore.repositories.technology_repo import TechnologyRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.catalog import (
    CatalogPage,
    VideoCardCreate,
    VideoCardDetails,
    VideoCardRead,
    VideoCardUpdate,
)
from gpustore.schemas.comment import CommentCreate
from gpustore.services.comment_service import CommentService
from gpustore.services.video_card_service import VideoCardService

router = APIRouter(prefix="/video-cards", tags=["Video cards"])

comment_repo = CommentRepository()
service = VideoCardService(
    VideoCardRepository(),
    ManufacturerRepository(),
    TechnologyRepository(),
    comment_repo,
)
comment_service = CommentService(comment_repo, service)


# -------- Admin listing (before /{card_id}) --------


@router.get(
    "/admin",
    response_model=list[VideoCardRead],
    dependencies=[Depends(require_admin)],
)
def list_cards_admin(session: Session = Depends(get_session)):
    """
    All video cards with manufacturer and technologies (admin only).
    """
    return service.list_admin(session)


# -------- Public endpoints --------


@router.get("", response_model=CatalogPage)
def browse_catalog(
    search: str | None = None,
    manufacturer_id: uuid.UUID | None = None,
    session: Session = Depends(get_session),
):
    """
    Browse the catalog.

    - `search`: case-insensitive substring of the model name.
    - `manufacturer_id`: only cards of this manufacturer.
    """
    return service.browse(session, search=search, manufacturer_id=manufacturer_id)


@router.get("/{card_id}", response_model=VideoCardDetails)
def get_card_details(
    card_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Card details with technologies and comments (newest first).
    """
    return service.get_details(session, card_id)


@router.post("/{card_id}/comments", response_model=VideoCardDetails)
def add_comment(
    card_id: uuid.UUID,
    payload: CommentCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Comment on a card (customers only; admins get 403).

    Blank comments are ignored. Returns the refreshed card details.
    """
    return comment_service.add_comment(session, card_id, current_user, payload)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=VideoCardRead,
    status_code=status.HTTP_201_CREATED,
)
def create_card(
    payload: VideoCardCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    Create a video card with its technology selection (admin only).
    """
    return service.create_card(session, payload, current_user)


@router.put(
    "/{card_id}",
    response_model=VideoCardRead,
    dependencies=[Depends(require_admin)],
)
def update_card(
    card_id: uuid.UUID,
    payload: VideoCardUpdate,
    session: Session = Depends(get_session),
):
    """
    Edit a video card (admin only).

    The submitted `technology_ids` replace the current selection.
    """
    return service.update_card(session, card_id, payload)


@router.post(
    "/{card_id}/image",
    response_model=VideoCardRead,
    dependencies=[Depends(require_admin)],
    summary="Upload or replace the image of a video card",
)
def upload_card_image(
    card_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload a new image for the card.

    - Accepts JPEG, PNG, WEBP up to 5MB.
    - Replaces any previous image.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.set_image(
        session=session,
        card_id=card_id,
        content_type=file.content_type,
        original_filename=file.filename or "image",
        file_bytes=file_bytes,
    )


@router.delete(
    "/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_card(
    card_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a card with its technology links, cart lines, comments
    and order lines (admin only).
    """
    service.delete_card(session, card_id)
    return None
