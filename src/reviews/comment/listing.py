"""Comment reads — the public product review list and the admin views."""

from catalog.product.repository import ProductRepository
from reviews.comment.comment import CommentStatus
from reviews.comment.repository import CommentRepository
from shared.api import paginate, pagination_meta
from shared.exceptions import ValidationError
from shared.repository import parse_sort

_SORTABLE_FIELDS = {"created_at", "rating", "is_helpful", "updated_at"}
_STATUS_VALUES = {status.value for status in CommentStatus}


class CommentQueries:
    def __init__(self, comments: CommentRepository, products: ProductRepository):
        self.comments = comments
        self.products = products

    def list_product_comments(self, product_id, page=1, limit=10, rating=None, sort=None) -> dict:
        product = self.products.get(product_id)

        skip, limit = paginate(page, limit)
        comments, total = self.comments.list_public(
            product.id,
            rating=rating,
            sort=parse_sort(sort, _SORTABLE_FIELDS),
            skip=skip,
            limit=limit,
        )
        summary = self.comments.rating_summary(product.id)
        return {
            "comments": comments,
            "pagination": pagination_meta(total, page, limit),
            "rating_stats": summary,
        }

    def list_all_comments(self, page=1, limit=20, status=None, product_id=None, user_id=None, sort=None) -> dict:
        if status and status not in _STATUS_VALUES:
            raise ValidationError({"status": ["Invalid status"]})

        skip, limit = paginate(page, limit)
        comments, total = self.comments.list_all(
            status=status,
            product_id=product_id,
            user_id=user_id,
            sort=parse_sort(sort, _SORTABLE_FIELDS),
            skip=skip,
            limit=limit,
        )
        return {"comments": comments, "pagination": pagination_meta(total, page, limit)}

    def comment_stats(self) -> dict:
        recent = self.comments.find({}, sort=[("created_at", -1)], limit=5)
        return {"status_stats": self.comments.count_by_status(), "recent_comments": recent}
