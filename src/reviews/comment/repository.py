from decimal import ROUND_HALF_UP, Decimal

from reviews.comment.comment import Comment, CommentStatus
from shared.db import COMMENTS
from shared.repository import Repository

_PUBLIC = {"status": CommentStatus.APPROVED.value, "is_active": True}


def _one_decimal(numerator: int, denominator: int) -> float:
    """Halves round up, so a 4.25 average shows as 4.3."""
    return float((Decimal(numerator) / Decimal(denominator)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class CommentRepository(Repository[Comment]):
    collection_name = COMMENTS
    model = Comment
    label = "Comment"

    def get_for_user_and_product(self, user_id, product_id) -> Comment | None:
        return self.find_one({"user_id": str(user_id), "product_id": str(product_id)})

    def list_public(self, product_id, rating=None, sort=None, skip=0, limit=0) -> tuple[list[Comment], int]:
        query = {**_PUBLIC, "product_id": str(product_id)}
        if rating:
            query["rating"] = int(rating)
        return self.find(query, sort=sort, skip=skip, limit=limit), self.count(query)

    def list_all(self, status=None, product_id=None, user_id=None, sort=None, skip=0, limit=0):
        query = {}
        if status:
            query["status"] = status
        if product_id:
            query["product_id"] = str(product_id)
        if user_id:
            query["user_id"] = str(user_id)
        return self.find(query, sort=sort, skip=skip, limit=limit), self.count(query)

    def rating_summary(self, product_id) -> dict:
        """Average (one decimal), count and 1–5 distribution over public comments."""
        pipeline = [
            {"$match": {**_PUBLIC, "product_id": str(product_id)}},
            {"$group": {"_id": "$rating", "count": {"$sum": 1}}},
        ]
        distribution = {star: 0 for star in range(1, 6)}
        for row in self._collection.aggregate(pipeline):
            distribution[int(row["_id"])] = row["count"]

        total = sum(distribution.values())
        average = _one_decimal(sum(star * count for star, count in distribution.items()), total) if total else 0
        return {"average_rating": average, "total_reviews": total, "rating_distribution": distribution}

    def count_by_status(self) -> dict[str, int]:
        pipeline = [{"$group": {"_id": "$status", "count": {"$sum": 1}}}]
        counts = {status.value: 0 for status in CommentStatus}
        for row in self._collection.aggregate(pipeline):
            counts[row["_id"]] = row["count"]
        return counts
