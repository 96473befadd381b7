# gpustore/services/video_card_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from gpustore.core.errors import field_error, not_found
from gpustore.core.storage_utils import delete_image, generate_filename, save_image
from gpustore.models.catalog import Technology, VideoCard
from gpustore.models.user import User
from gpustore.repositories.comment_repo import CommentRepository
from gpustore.repositories.manufacturer_repo import ManufacturerRepository
from gpustore.repositories.technology_repo import TechnologyRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.catalog import (
    CatalogPage,
    ManufacturerRead,
    TechnologyRead,
    VideoCardCreate,
    VideoCardDetails,
    VideoCardRead,
    VideoCardUpdate,
)
from gpustore.schemas.comment import CommentRead

logger = logging.getLogger(__name__)


# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class VideoCardService:
    """
    Business logic for video cards.

    Responsibilities:
      - public catalog browsing and details (with comments)
      - (model_name, manufacturer) uniqueness
      - technology selection: rewritten in full on every edit
      - image upload to the static images directory
      - cascading delete of rows that reference a card
    """

    def __init__(
        self,
        repo: VideoCardRepository,
        manufacturer_repo: ManufacturerRepository,
        technology_repo: TechnologyRepository,
        comment_repo: CommentRepository,
    ):
        self.repo = repo
        self.manufacturer_repo = manufacturer_repo
        self.technology_repo = technology_repo
        self.comment_repo = comment_repo

    # ----- Helpers -----

    @staticmethod
    def _to_read(
        card: VideoCard,
        manufacturer_name: str | None,
        technologies: list[Technology],
    ) -> VideoCardRead:
        return VideoCardRead(
            id=card.id,
            model_name=card.model_name,
            price=card.price,
            manufacturer_id=card.manufacturer_id,
            manufacturer_name=manufacturer_name,
            image_url=card.image_url,
            description=card.description,
            added_by_id=card.added_by_id,
            created_at=card.created_at,
            technologies=[TechnologyRead(id=t.id, name=t.name) for t in technologies],
        )

    def _validate_payload(
        self,
        session: Session,
        payload: VideoCardCreate,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        """
        Reject unknown references and duplicate models with
        field-level errors before anything is written.
        """
        if not self.manufacturer_repo.get_by_id(session, payload.manufacturer_id):
            raise field_error("manufacturer_id", "Select an existing manufacturer.")

        if self.repo.model_taken(
            session, payload.model_name, payload.manufacturer_id, exclude_id=exclude_id
        ):
            raise field_error(
                "model_name",
                "This video card already exists for the selected manufacturer.",
            )

        found = self.technology_repo.get_many(session, payload.technology_ids)
        if len(found) != len(payload.technology_ids):
            raise field_error("technology_ids", "Unknown technology selected.")

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    @staticmethod
    def remove_image_file(filename: str) -> None:
        delete_image(filename)

    # ----- Reads -----

    def get_card(self, session: Session, card_id: uuid.UUID) -> VideoCard:
        card = self.repo.get_by_id(session, card_id)
        if not card:
            raise not_found("Video card")
        return card

    def browse(
        self,
        session: Session,
        search: str | None = None,
        manufacturer_id: uuid.UUID | None = None,
    ) -> CatalogPage:
        """
        Public catalog: model-name substring search plus manufacturer filter.
        """
        search = search.strip() if search else None
        rows = self.repo.search(session, search=search, manufacturer_id=manufacturer_id)
        manufacturers = self.manufacturer_repo.list(session)

        return CatalogPage(
            items=[self._to_read(card, m.name, []) for card, m in rows],
            manufacturers=[ManufacturerRead(id=m.id, name=m.name) for m in manufacturers],
            search=search or None,
            manufacturer_id=manufacturer_id,
        )

    def list_admin(self, session: Session) -> list[VideoCardRead]:
        """
        Every card with manufacturer and technologies (admin table).
        """
        rows = self.repo.search(session)
        techs = self.repo.technologies_for_cards(session, [card.id for card, _ in rows])
        return [self._to_read(card, m.name, techs.get(card.id, [])) for card, m in rows]

    def get_details(self, session: Session, card_id: uuid.UUID) -> VideoCardDetails:
        row = self.repo.get_with_manufacturer(session, card_id)
        if not row:
            raise not_found("Video card")
        card, manufacturer = row

        techs = self.repo.technologies_for_cards(session, [card.id]).get(card.id, [])
        comments = [
            CommentRead(
                id=c.id,
                content=c.content,
                created_at=c.created_at,
                user_id=c.user_id,
                author_email=email,
            )
            for c, email in self.comment_repo.list_for_card(session, card.id)
        ]

        base = self._to_read(card, manufacturer.name, techs)
        return VideoCardDetails(**base.model_dump(), comments=comments)

    def _read_one(self, session: Session, card: VideoCard) -> VideoCardRead:
        manufacturer = self.manufacturer_repo.get_by_id(session, card.manufacturer_id)
        techs = self.repo.technologies_for_cards(session, [card.id]).get(card.id, [])
        return self._to_read(card, manufacturer.name if manufacturer else None, techs)

    # ----- Writes -----

    def create_card(
        self,
        session: Session,
        payload: VideoCardCreate,
        created_by: User,
    ) -> VideoCardRead:
        """
        Create a card and one technology link per selected technology.
        """
        self._validate_payload(session, payload)

        card = VideoCard(
            model_name=payload.model_name,
            price=payload.price,
            manufacturer_id=payload.manufacturer_id,
            description=payload.description,
            added_by_id=created_by.id,
        )
        card = self.repo.add(session, card)
        self.repo.replace_technologies(session, card.id, payload.technology_ids)
        session.commit()
        session.refresh(card)

        return self._read_one(session, card)

    def update_card(
        self,
        session: Session,
        card_id: uuid.UUID,
        payload: VideoCardUpdate,
    ) -> VideoCardRead:
        """
        Replace a card's editable fields and its technology selection.

        The stored image and the creator are kept. All existing links
        are dropped and the submitted selection inserted, in the same
        transaction as the field update.
        """
        card = self.get_card(session, card_id)
        self._validate_payload(session, payload, exclude_id=card.id)

        card.model_name = payload.model_name
        card.price = payload.price
        card.manufacturer_id = payload.manufacturer_id
        card.description = payload.description

        try:
            self.repo.add(session, card)
            self.repo.replace_technologies(session, card.id, payload.technology_ids)
            session.commit()
        except StaleDataError:
            # row deleted by someone else between load and flush
            session.rollback()
            raise not_found("Video card")

        session.refresh(card)
        logger.info(
            "Video card %s updated, %d technology link(s)",
            card.id,
            len(payload.technology_ids),
        )
        return self._read_one(session, card)

    def set_image(
        self,
        session: Session,
        card_id: uuid.UUID,
        content_type: str,
        original_filename: str,
        file_bytes: bytes,
    ) -> VideoCardRead:
        """
        Upload or replace the card image.

        - Validates content type + size.
        - Stores the file under a unique name with the extension of the
          validated content type, keeps only the filename.
        - Removes the new file again if the row cannot be saved.
        - Deletes the previous file if there was one.
        """
        card = self.get_card(session, card_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        old_filename = card.image_url
        new_filename = save_image(generate_filename(original_filename, ext), file_bytes)
        try:
            card.image_url = new_filename
            self.repo.add(session, card)
            session.commit()
        except Exception:
            session.rollback()
            self.remove_image_file(new_filename)
            logger.exception("Saving image %s for card %s failed", new_filename, card_id)
            raise
        session.refresh(card)

        if old_filename:
            self.remove_image_file(old_filename)

        return self._read_one(session, card)

    def delete_card(self, session: Session, card_id: uuid.UUID) -> None:
        """
        Delete a card, the rows referencing it, and its image file.
        """
        card = self.get_card(session, card_id)
        image = card.image_url

        self.repo.delete(session, card)
        session.commit()

        if image:
            self.remove_image_file(image)
