# gpustore/services/technology_service.py
import uuid

from sqlmodel import Session

from gpustore.core.errors import field_error, not_found
from gpustore.models.catalog import Technology
from gpustore.repositories.technology_repo import TechnologyRepository
from gpustore.schemas.catalog import TechnologyCreate, TechnologyUpdate


class TechnologyService:
    """
    Admin CRUD for technologies, with the same duplicate-name rule
    as manufacturers.
    """

    def __init__(self, repo: TechnologyRepository):
        self.repo = repo

    def list_technologies(self, session: Session) -> list[Technology]:
        return self.repo.list(session)

    def get_technology(self, session: Session, technology_id: uuid.UUID) -> Technology:
        technology = self.repo.get_by_id(session, technology_id)
        if not technology:
            raise not_found("Technology")
        return technology

    def create_technology(self, session: Session, payload: TechnologyCreate) -> Technology:
        if self.repo.name_taken(session, payload.name):
            raise field_error("name", "This technology already exists.")
        return self.repo.create(session, Technology(name=payload.name))

    def update_technology(
        self,
        session: Session,
        technology_id: uuid.UUID,
        payload: TechnologyUpdate,
    ) -> Technology:
        technology = self.get_technology(session, technology_id)
        if self.repo.name_taken(session, payload.name, exclude_id=technology.id):
            raise field_error("name", "Another technology already uses this name.")
        technology.name = payload.name
        return self.repo.update(session, technology)

    def delete_technology(self, session: Session, technology_id: uuid.UUID) -> None:
        technology = self.get_technology(session, technology_id)
        self.repo.delete(session, technology)
