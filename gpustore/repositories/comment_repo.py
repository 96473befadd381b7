# gpustore/repositories/comment_repo.py
import uuid

from sqlmodel import Session, select

from gpustore.models.comment import Comment
from gpustore.models.user import User


class CommentRepository:

    def list_for_card(
        self,
        session: Session,
        card_id: uuid.UUID,
    ) -> list[tuple[Comment, str | None]]:
        """
        Comments of a card newest first, each with its author's email.
        """
        stmt = (
            select(Comment, User.email)
            .join(User, User.id == Comment.user_id, isouter=True)
            .where(Comment.video_card_id == card_id)
            .order_by(Comment.created_at.desc())
        )
        return session.exec(stmt).all()

    def create(self, session: Session, comment: Comment) -> Comment:
        session.add(comment)
        session.commit()
        session.refresh(comment)
        return comment
