"""SubmitComment — a customer reviews a product.

One review per user per product. The review is marked as a verified purchase
when the user has a shipped order containing the product. Admins' reviews
are approved immediately; everyone else's wait for moderation.
"""

import structlog
from pydantic import Field

from catalog.product.repository import ProductRepository
from ordering.order.order import OrderStatus
from ordering.order.repository import OrderRepository
from reviews.comment.comment import Comment, CommentImage
from reviews.comment.rating import ProductRatingUpdater
from reviews.comment.repository import CommentRepository
from shared.command import Command
from shared.exceptions import ValidationError

logger = structlog.get_logger(__name__)

_PURCHASED_STATES = (OrderStatus.SHIPPED.value,)


class SubmitComment(Command):
    user_id: str
    user_name: str | None = None
    is_admin: bool = False
    product_id: str
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=1, max_length=100)
    comment: str = Field(min_length=1, max_length=1000)
    images: list[CommentImage] = Field(default_factory=list)


class SubmitCommentHandler:
    def __init__(self, comments: CommentRepository, products: ProductRepository, orders: OrderRepository):
        self.comments = comments
        self.products = products
        self.orders = orders

    def submit_comment(self, command: SubmitComment) -> Comment:
        product = self.products.get(command.product_id)

        if self.comments.get_for_user_and_product(command.user_id, product.id) is not None:
            raise ValidationError({"product_id": ["You have already reviewed this product"]})

        comment = Comment.submit(
            user_id=command.user_id,
            user_name=command.user_name,
            product_id=product.id,
            rating=command.rating,
            title=command.title,
            comment=command.comment,
            images=command.images,
            is_verified_purchase=self.orders.has_purchased(command.user_id, product.id, _PURCHASED_STATES),
            auto_approve=command.is_admin,
        )
        self.comments.add(comment)
        ProductRatingUpdater(self.comments, self.products).recompute(product.id)

        logger.info(
            "Comment submitted",
            comment_id=comment.id,
            product_id=product.id,
            user_id=comment.user_id,
            status=comment.status,
        )
        return comment
