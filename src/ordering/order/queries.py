"""Order reads: listings, single-order access, the sales summary and sales analytics."""

from collections import defaultdict
from datetime import UTC, datetime

from ordering.order.order import ABSORBING_STATES, Order, OrderStatus
from ordering.order.repository import OrderRepository
from shared.api import paginate, pagination_meta
from shared.auth import Actor
from shared.exceptions import Forbidden, ValidationError

_STATUS_VALUES = {status.value for status in OrderStatus}
_COUNTED_STATUSES = [status.value for status in OrderStatus if status not in ABSORBING_STATES]

ANALYTICS_PERIODS = ("day", "week", "month")


def period_key(moment: datetime, period: str) -> str:
    """Bucket label for ``moment``: ``2026-10-18``, ``2026-W42`` or ``2026-10``."""
    if period == "day":
        return moment.strftime("%Y-%m-%d")
    if period == "week":
        year, week, _ = moment.isocalendar()
        return f"{year}-W{week:02d}"
    return moment.strftime("%Y-%m")


class OrderQueries:
    def __init__(self, orders: OrderRepository):
        self.orders = orders

    def list_orders(self, actor: Actor, status=None, page=1, limit=10) -> dict:
        """Staff see every order; customers only their own."""
        if status and status not in _STATUS_VALUES:
            raise ValidationError({"status": [f"Invalid order status: {status}"]})

        skip, limit = paginate(page, limit)
        orders, total = self.orders.list_orders(
            user_id=None if actor.is_staff else actor.id,
            status=status,
            skip=skip,
            limit=limit,
        )
        return {"orders": [order.view() for order in orders], "pagination": pagination_meta(total, page, limit)}

    def get_order(self, order_id: str, actor: Actor) -> Order:
        order = self.orders.get(order_id)
        if not actor.is_staff and not order.is_owned_by(actor.id):
            raise Forbidden("Access denied")
        return order

    def sales_summary(self) -> dict:
        totals = self.orders.totals_by_status()
        return {
            "total_orders": sum(row["count"] for row in totals.values()),
            "orders_by_status": {status.value: totals.get(status.value, {}).get("count", 0) for status in OrderStatus},
            "total_revenue": sum(totals.get(status, {}).get("revenue", 0) for status in _COUNTED_STATUSES),
            "items_sold": self.orders.items_sold(_COUNTED_STATUSES),
        }

    def sales_analytics(self, period="month", year=None, limit=10) -> dict:
        """Revenue over time and top-selling products for one calendar year.

        Cancelled and returned orders are left out, as in the sales summary.
        """
        if period not in ANALYTICS_PERIODS:
            raise ValidationError({"period": [f"Invalid period: {period}"]})
        year = year or datetime.now(UTC).year

        orders = [
            order
            for order in self.orders.in_statuses(_COUNTED_STATUSES)
            if order.created_at and order.created_at.year == year
        ]

        buckets = defaultdict(lambda: {"revenue": 0.0, "orders": 0})
        products = {}
        for order in orders:
            bucket = buckets[period_key(order.created_at, period)]
            bucket["revenue"] += order.total_price
            bucket["orders"] += 1
            for item in order.items:
                sold = products.setdefault(
                    item.product_id,
                    {"product_id": item.product_id, "name": item.name, "total_sold": 0, "revenue": 0.0},
                )
                sold["total_sold"] += item.quantity
                sold["revenue"] += item.price * item.quantity

        sales_over_time = [
            {
                "period": key,
                "revenue": round(bucket["revenue"], 2),
                "orders": bucket["orders"],
                "avg_order_value": round(bucket["revenue"] / bucket["orders"], 2),
            }
            for key, bucket in sorted(buckets.items())
        ]
        top_products = sorted(products.values(), key=lambda row: (-row["total_sold"], -row["revenue"]))[:limit]
        return {"period": period, "year": year, "sales_over_time": sales_over_time, "top_products": top_products}
