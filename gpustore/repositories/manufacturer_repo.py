# gpustore/repositories/manufacturer_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from gpustore.models.catalog import Manufacturer


class ManufacturerRepository:
    """
    Data access layer for Manufacturer.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, manufacturer_id: uuid.UUID) -> Manufacturer | None:
        return session.get(Manufacturer, manufacturer_id)

    def name_taken(
        self,
        session: Session,
        name: str,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        """
        True if another manufacturer already uses `name`
        (trimmed, case-insensitive).
        """
        stmt = select(Manufacturer.id).where(
            func.lower(Manufacturer.name) == name.strip().lower()
        )
        if exclude_id is not None:
            stmt = stmt.where(Manufacturer.id != exclude_id)
        return session.exec(stmt).first() is not None

    def list(self, session: Session) -> list[Manufacturer]:
        stmt = select(Manufacturer).order_by(Manufacturer.name)
        return session.exec(stmt).all()

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Manufacturer)).one()

    def create(self, session: Session, manufacturer: Manufacturer) -> Manufacturer:
        session.add(manufacturer)
        session.commit()
        session.refresh(manufacturer)
        return manufacturer

    def update(self, session: Session, manufacturer: Manufacturer) -> Manufacturer:
        session.add(manufacturer)
        session.commit()
        session.refresh(manufacturer)
        return manufacturer
