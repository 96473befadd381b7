# gpustore/services/admin_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from gpustore.core.storage_utils import delete_image
from gpustore.models.catalog import CardTechnology, Manufacturer, Technology, VideoCard
from gpustore.repositories.admin_repo import AdminRepository
from gpustore.repositories.manufacturer_repo import ManufacturerRepository
from gpustore.repositories.order_repo import OrderRepository
from gpustore.repositories.video_card_repo import VideoCardRepository
from gpustore.schemas.admin import AdminActionResult, AdminDashboardStats
from gpustore.services import seed_data

logger = logging.getLogger(__name__)


class AdminService:
    """
    Back-office operations: dashboard numbers, demo data, wipe.
    """

    def __init__(
        self,
        repo: AdminRepository,
        card_repo: VideoCardRepository,
        manufacturer_repo: ManufacturerRepository,
        order_repo: OrderRepository,
    ):
        self.repo = repo
        self.card_repo = card_repo
        self.manufacturer_repo = manufacturer_repo
        self.order_repo = order_repo

    def get_dashboard(self, session: Session) -> AdminDashboardStats:
        return AdminDashboardStats(
            total_video_cards=int(self.card_repo.count(session) or 0),
            total_orders=int(self.order_repo.count(session) or 0),
            total_manufacturers=int(self.manufacturer_repo.count(session) or 0),
            total_revenue=float(self.order_repo.total_revenue(session) or 0.0),
        )

    def seed_demo_data(self, session: Session) -> AdminActionResult:
        """
        Load the demo catalog.

        Each table is only filled while it is empty, so running this
        twice changes nothing.
        """
        added: list[str] = []

        if self.repo.is_empty(session, Manufacturer):
            session.add_all(Manufacturer(name=name) for name in seed_data.MANUFACTURERS)
            session.flush()
            added.append("manufacturers")

        if self.repo.is_empty(session, Technology):
            session.add_all(Technology(name=name) for name in seed_data.TECHNOLOGIES)
            session.flush()
            added.append("technologies")

        seeded_cards: list[VideoCard] = []
        if self.repo.is_empty(session, VideoCard):
            manufacturers = {m.name: m.id for m in session.exec(select(Manufacturer)).all()}
            for model_name, price, maker, description, image in seed_data.VIDEO_CARDS:
                if maker not in manufacturers:
                    continue
                card = VideoCard(
                    model_name=model_name,
                    price=price,
                    manufacturer_id=manufacturers[maker],
                    description=description,
                    image_url=image,
                )
                session.add(card)
                seeded_cards.append(card)
            session.flush()
            added.append("video cards")

        # links only for cards inserted by this run
        if seeded_cards and self.repo.is_empty(session, CardTechnology):
            technologies = {t.name: t.id for t in session.exec(select(Technology)).all()}
            for card in seeded_cards:
                for tech_name in seed_data.technologies_for_model(card.model_name):
                    if tech_name in technologies:
                        session.add(
                            CardTechnology(
                                video_card_id=card.id,
                                technology_id=technologies[tech_name],
                            )
                        )
            session.flush()
            added.append("technology links")

        session.commit()

        if not added:
            return AdminActionResult(success=True, message="Demo data already loaded.")

        logger.info("Seeded demo data: %s", ", ".join(added))
        return AdminActionResult(
            success=True,
            message=f"Demo data loaded: {', '.join(added)}.",
        )

    def clear_all_data(self, session: Session) -> AdminActionResult:
        """
        Irreversibly delete catalog, carts, comments and orders.
        Uploaded card images are removed once the wipe is committed;
        the bundled demo images are kept.

        Datastore errors are rolled back and reported, never raised.
        """
        try:
            demo_images = {image for *_, image in seed_data.VIDEO_CARDS}
            images = [
                name for name in self.repo.image_filenames(session) if name not in demo_images
            ]
            deleted = self.repo.clear_catalog_and_orders(session)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Clearing the database failed")
            return AdminActionResult(
                success=False,
                message=f"Error while clearing the database: {exc}",
            )

        logger.warning("Database cleared: %s", deleted)
        for filename in images:
            delete_image(filename)
        return AdminActionResult(success=True, message="The database was cleared successfully.")
