"""EditComment and RemoveComment — changes by the author or an admin."""

import structlog
from pydantic import Field

from catalog.product.repository import ProductRepository
from reviews.comment.comment import Comment, CommentImage
from reviews.comment.rating import ProductRatingUpdater
from reviews.comment.repository import CommentRepository
from shared.command import Command
from shared.exceptions import Forbidden

logger = structlog.get_logger(__name__)


class EditComment(Command):
    comment_id: str
    user_id: str
    is_admin: bool = False
    rating: int | None = Field(default=None, ge=1, le=5)
    title: str | None = Field(default=None, min_length=1, max_length=100)
    comment: str | None = Field(default=None, min_length=1, max_length=1000)
    images: list[CommentImage] | None = None


class RemoveComment(Command):
    comment_id: str
    user_id: str
    is_admin: bool = False


class EditCommentHandler:
    def __init__(self, comments: CommentRepository, products: ProductRepository):
        self.comments = comments
        self.products = products

    def _authorized(self, comment_id, user_id, is_admin, action) -> Comment:
        comment = self.comments.get(comment_id)
        if not is_admin and not comment.is_written_by(user_id):
            raise Forbidden(f"Not authorized to {action} this comment")
        return comment

    def edit_comment(self, command: EditComment) -> Comment:
        comment = self._authorized(command.comment_id, command.user_id, command.is_admin, "update")
        comment.edit(
            rating=command.rating,
            title=command.title,
            comment=command.comment,
            images=command.images,
            by_admin=command.is_admin,
        )
        self.comments.add(comment)
        ProductRatingUpdater(self.comments, self.products).recompute(comment.product_id)

        logger.info("Comment edited", comment_id=comment.id, status=comment.status)
        return comment

    def remove_comment(self, command: RemoveComment) -> None:
        comment = self._authorized(command.comment_id, command.user_id, command.is_admin, "delete")
        comment.remove()
        self.comments.add(comment)
        ProductRatingUpdater(self.comments, self.products).recompute(comment.product_id)

        logger.info("Comment removed", comment_id=comment.id, removed_by=command.user_id)
