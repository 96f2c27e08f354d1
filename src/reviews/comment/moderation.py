"""ModerateComment — an admin approves or rejects a comment."""

import structlog

from catalog.product.repository import ProductRepository
from reviews.comment.comment import Comment, CommentStatus
from reviews.comment.rating import ProductRatingUpdater
from reviews.comment.repository import CommentRepository
from shared.command import Command

logger = structlog.get_logger(__name__)


class ModerateComment(Command):
    comment_id: str
    status: CommentStatus
    moderated_by: str | None = None


class ModerateCommentHandler:
    def __init__(self, comments: CommentRepository, products: ProductRepository):
        self.comments = comments
        self.products = products

    def moderate_comment(self, command: ModerateComment) -> Comment:
        comment = self.comments.get(command.comment_id)
        comment.moderate(command.status)
        self.comments.add(comment)
        ProductRatingUpdater(self.comments, self.products).recompute(comment.product_id)

        logger.info(
            "Comment moderated",
            comment_id=comment.id,
            status=comment.status,
            moderated_by=command.moderated_by,
        )
        return comment
