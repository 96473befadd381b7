# gpustore/repositories/video_card_repo.py
import uuid
from collections import defaultdict

from sqlalchemy import func
from sqlmodel import Session, select

from gpustore.models.cart import CartItem
from gpustore.models.catalog import CardTechnology, Manufacturer, Technology, VideoCard
from gpustore.models.comment import Comment
from gpustore.models.order import OrderItem


class VideoCardRepository:
    """
    Data access layer for VideoCard and its technology links.

    NOTE:
      - No commits here; creating or editing a card touches several
        tables. The service is responsible for calling session.commit().
    """

    # ----- Queries -----

    def get_by_id(self, session: Session, card_id: uuid.UUID) -> VideoCard | None:
        return session.get(VideoCard, card_id)

    def get_with_manufacturer(
        self,
        session: Session,
        card_id: uuid.UUID,
    ) -> tuple[VideoCard, Manufacturer] | None:
        stmt = (
            select(VideoCard, Manufacturer)
            .join(Manufacturer, Manufacturer.id == VideoCard.manufacturer_id)
            .where(VideoCard.id == card_id)
        )
        return session.exec(stmt).first()

    def search(
        self,
        session: Session,
        search: str | None = None,
        manufacturer_id: uuid.UUID | None = None,
    ) -> list[tuple[VideoCard, Manufacturer]]:
        """
        Catalog listing with optional model-name substring and
        manufacturer filters.
        """
        stmt = select(VideoCard, Manufacturer).join(
            Manufacturer, Manufacturer.id == VideoCard.manufacturer_id
        )
        if search:
            stmt = stmt.where(
                func.lower(VideoCard.model_name).contains(search.lower(), autoescape=True)
            )
        if manufacturer_id is not None:
            stmt = stmt.where(VideoCard.manufacturer_id == manufacturer_id)
        stmt = stmt.order_by(VideoCard.model_name)
        return session.exec(stmt).all()

    def list_for_manufacturer(
        self,
        session: Session,
        manufacturer_id: uuid.UUID,
    ) -> list[VideoCard]:
        stmt = select(VideoCard).where(VideoCard.manufacturer_id == manufacturer_id)
        return session.exec(stmt).all()

    def model_taken(
        self,
        session: Session,
        model_name: str,
        manufacturer_id: uuid.UUID,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        """
        True if the manufacturer already has a card with this model name
        (trimmed, case-insensitive), ignoring `exclude_id`.
        """
        stmt = select(VideoCard.id).where(
            func.lower(VideoCard.model_name) == model_name.strip().lower(),
            VideoCard.manufacturer_id == manufacturer_id,
        )
        if exclude_id is not None:
            stmt = stmt.where(VideoCard.id != exclude_id)
        return session.exec(stmt).first() is not None

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(VideoCard)).one()

    # ----- Technologies -----

    def technologies_for_cards(
        self,
        session: Session,
        card_ids: list[uuid.UUID],
    ) -> dict[uuid.UUID, list[Technology]]:
        """
        Map card id -> linked technologies (sorted by name).
        """
        result: dict[uuid.UUID, list[Technology]] = defaultdict(list)
        if not card_ids:
            return result

        stmt = (
            select(CardTechnology.video_card_id, Technology)
            .join(Technology, Technology.id == CardTechnology.technology_id)
            .where(CardTechnology.video_card_id.in_(card_ids))
            .order_by(Technology.name)
        )
        for card_id, tech in session.exec(stmt).all():
            result[card_id].append(tech)
        return result

    def replace_technologies(
        self,
        session: Session,
        card_id: uuid.UUID,
        technology_ids: list[uuid.UUID],
    ) -> None:
        """
        Delete every link of the card, then insert one link per id.

        Not a diff: the whole set is rewritten on every edit.
        """
        old_links = session.exec(
            select(CardTechnology).where(CardTechnology.video_card_id == card_id)
        ).all()
        for link in old_links:
            session.delete(link)
        # old rows must be gone before re-inserting the same keys
        session.flush()

        session.add_all(
            CardTechnology(video_card_id=card_id, technology_id=tech_id)
            for tech_id in technology_ids
        )
        session.flush()

    # ----- Writes -----

    def add(self, session: Session, card: VideoCard) -> VideoCard:
        """
        Insert or update a card without committing, but ensure id is populated.
        """
        session.add(card)
        session.flush()
        session.refresh(card)
        return card

    def delete(self, session: Session, card: VideoCard) -> None:
        """
        Delete a card after every row that references it:
        technology links, cart lines, comments and order items.
        """
        for model in (CardTechnology, CartItem, Comment, OrderItem):
            rows = session.exec(select(model).where(model.video_card_id == card.id)).all()
            for row in rows:
                session.delete(row)
        session.flush()

        session.delete(card)
        session.flush()
