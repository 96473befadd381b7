# gpustore/repositories/admin_repo.py
from sqlmodel import Session, select

from gpustore.models.cart import CartItem
from gpustore.models.catalog import CardTechnology, Manufacturer, Technology, VideoCard
from gpustore.models.comment import Comment
from gpustore.models.order import Order, OrderItem

# Children before parents so foreign keys never dangle mid-flush.
CLEAR_ORDER = (
    CardTechnology,
    OrderItem,
    Comment,
    CartItem,
    VideoCard,
    Manufacturer,
    Technology,
    Order,
)


class AdminRepository:
    """
    Bulk back-office operations.

    NOTE:
      - No commits here; the service decides commit vs rollback.
    """

    def is_empty(self, session: Session, model) -> bool:
        return session.exec(select(model)).first() is None

    def image_filenames(self, session: Session) -> list[str]:
        stmt = select(VideoCard.image_url).where(VideoCard.image_url.is_not(None))
        return session.exec(stmt).all()

    def clear_catalog_and_orders(self, session: Session) -> dict[str, int]:
        """
        Delete every catalog, cart, comment and order row.

        Returns:
            Number of deleted rows per table.
        """
        deleted: dict[str, int] = {}
        for model in CLEAR_ORDER:
            rows = session.exec(select(model)).all()
            for row in rows:
                session.delete(row)
            session.flush()
            deleted[model.__tablename__] = len(rows)
        return deleted
