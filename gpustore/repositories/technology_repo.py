# gpustore/repositories/technology_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from gpustore.models.catalog import CardTechnology, Technology


class TechnologyRepository:
    """
    Data access layer for Technology.
    """

    def get_by_id(self, session: Session, technology_id: uuid.UUID) -> Technology | None:
        return session.get(Technology, technology_id)

    def get_many(self, session: Session, ids: list[uuid.UUID]) -> list[Technology]:
        if not ids:
            return []
        stmt = select(Technology).where(Technology.id.in_(ids))
        return session.exec(stmt).all()

    def name_taken(
        self,
        session: Session,
        name: str,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        stmt = select(Technology.id).where(
            func.lower(Technology.name) == name.strip().lower()
        )
        if exclude_id is not None:
            stmt = stmt.where(Technology.id != exclude_id)
        return session.exec(stmt).first() is not None

    def list(self, session: Session) -> list[Technology]:
        stmt = select(Technology).order_by(Technology.name)
        return session.exec(stmt).all()

    def create(self, session: Session, technology: Technology) -> Technology:
        session.add(technology)
        session.commit()
        session.refresh(technology)
        return technology

    def update(self, session: Session, technology: Technology) -> Technology:
        session.add(technology)
        session.commit()
        session.refresh(technology)
        return technology

    def delete(self, session: Session, technology: Technology) -> None:
        """
        Delete a technology and the card links pointing at it.
        """
        links = session.exec(
            select(CardTechnology).where(CardTechnology.technology_id == technology.id)
        ).all()
        for link in links:
            session.delete(link)
        session.flush()

        session.delete(technology)
        session.commit()
