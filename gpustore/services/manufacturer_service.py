# gpustore/services/manufacturer_service.py
import logging
import uuid

from sqlmodel import Session

from gpustore.core.errors import field_error, not_found
from gpustore.models.catalog import Manufacturer
from gpustore.repositories.manufacturer_repo import ManufacturerRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.services.video_card_service import VideoCardService
from gpustore.schemas.catalog import ManufacturerCreate, ManufacturerUpdate

logger = logging.getLogger(__name__)


class ManufacturerService:
    """
    Admin CRUD for manufacturers.

    Names are unique (trimmed, case-insensitive); a clash is reported
    as a validation error on `name` and nothing is written.
    """

    def __init__(
        self,
        repo: ManufacturerRepository,
        card_repo: VideoCardRepository,
        card_service: VideoCardService,
    ):
        self.repo = repo
        self.card_repo = card_repo
        self.card_service = card_service

    def list_manufacturers(self, session: Session) -> list[Manufacturer]:
        return self.repo.list(session)

    def get_manufacturer(self, session: Session, manufacturer_id: uuid.UUID) -> Manufacturer:
        manufacturer = self.repo.get_by_id(session, manufacturer_id)
        if not manufacturer:
            raise not_found("Manufacturer")
        return manufacturer

    def create_manufacturer(self, session: Session, payload: ManufacturerCreate) -> Manufacturer:
        if self.repo.name_taken(session, payload.name):
            raise field_error("name", "This manufacturer already exists.")
        return self.repo.create(session, Manufacturer(name=payload.name))

    def update_manufacturer(
        self,
        session: Session,
        manufacturer_id: uuid.UUID,
        payload: ManufacturerUpdate,
    ) -> Manufacturer:
        manufacturer = self.get_manufacturer(session, manufacturer_id)
        if self.repo.name_taken(session, payload.name, exclude_id=manufacturer.id):
            raise field_error("name", "Another manufacturer already uses this name.")
        manufacturer.name = payload.name
        return self.repo.update(session, manufacturer)

    def delete_manufacturer(self, session: Session, manufacturer_id: uuid.UUID) -> None:
        """
        Delete a manufacturer together with all of its video cards
        (and everything that references those cards).
        """
        manufacturer = self.get_manufacturer(session, manufacturer_id)
        cards = self.card_repo.list_for_manufacturer(session, manufacturer.id)
        images = [card.image_url for card in cards if card.image_url]

        for card in cards:
            self.card_repo.delete(session, card)
        session.delete(manufacturer)
        session.commit()

        logger.info("Deleted manufacturer %s with %d card(s)", manufacturer_id, len(cards))
        for filename in images:
            self.card_service.remove_image_file(filename)
