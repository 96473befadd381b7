# gpustore/services/comment_service.py
import uuid

from sqlmodel import Session

from gpustore.models.comment import Comment
from gpustore.models.user import User
from gpustore.repositories.comment_repo import CommentRepository
from gpustore.schemas.catalog import VideoCardDetails
from gpustore.schemas.comment import CommentCreate
from gpustore.services.video_card_service import VideoCardService


class CommentService:
    def __init__(self, repo: CommentRepository, card_service: VideoCardService):
        self.repo = repo
        self.card_service = card_service

    def add_comment(
        self,
        session: Session,
        card_id: uuid.UUID,
        author: User,
        payload: CommentCreate,
    ) -> VideoCardDetails:
        """
        Attach a comment to a card and return the refreshed details.

        Blank content is ignored without error.
        """
        card = self.card_service.get_card(session, card_id)

        content = payload.content.strip()
        if content:
            self.repo.create(
                session,
                Comment(content=content, video_card_id=card.id, user_id=author.id),
            )

        return self.card_service.get_details(session, card.id)
