"""Recomputes a product's public rating from its approved, active comments."""

import structlog

from catalog.product.repository import ProductRepository
from reviews.comment.repository import CommentRepository

logger = structlog.get_logger(__name__)


class ProductRatingUpdater:
    def __init__(self, comments: CommentRepository, products: ProductRepository):
        self.comments = comments
        self.products = products

    def recompute(self, product_id) -> dict:
        summary = self.comments.rating_summary(product_id)
        self.products.set_ratings(product_id, summary["average_rating"], summary["total_reviews"])
        logger.debug(
            "Product rating recomputed",
            product_id=str(product_id),
            average=summary["average_rating"],
            count=summary["total_reviews"],
        )
        return summary
