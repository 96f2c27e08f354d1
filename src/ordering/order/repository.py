from ordering.order.order import Order
from shared.db import ORDERS
from shared.repository import Repository


class OrderRepository(Repository[Order]):
    collection_name = ORDERS
    model = Order
    label = "Order"

    def list_orders(self, user_id=None, status=None, skip=0, limit=0) -> tuple[list[Order], int]:
        query = {}
        if user_id is not None:
            query["user_id"] = str(user_id)
        if status:
            query["order_status"] = status
        return self.find(query, sort=[("created_at", -1)], skip=skip, limit=limit), self.count(query)

    def has_purchased(self, user_id, product_id, statuses) -> bool:
        """Whether ``user_id`` has an order in one of ``statuses`` containing ``product_id``."""
        return self.exists(
            {
                "user_id": str(user_id),
                "order_status": {"$in": list(statuses)},
                "items.product_id": str(product_id),
            }
        )

    def totals_by_status(self) -> dict[str, dict]:
        """Order count and revenue per status."""
        pipeline = [
            {"$group": {"_id": "$order_status", "count": {"$sum": 1}, "revenue": {"$sum": "$total_price"}}},
        ]
        rows = self._collection.aggregate(pipeline)
        return {row["_id"]: {"count": row["count"], "revenue": row["revenue"]} for row in rows}

    def items_sold(self, statuses) -> int:
        pipeline = [
            {"$match": {"order_status": {"$in": list(statuses)}}},
            {"$unwind": "$items"},
            {"$group": {"_id": None, "quantity": {"$sum": "$items.quantity"}}},
        ]
        rows = list(self._collection.aggregate(pipeline))
        return rows[0]["quantity"] if rows else 0

    def in_statuses(self, statuses) -> list[Order]:
        return self.find({"order_status": {"$in": list(statuses)}}, sort=[("created_at", 1)])
