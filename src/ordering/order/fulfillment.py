"""Order fulfillment — advancing an order along its forward path."""

from datetime import datetime

import structlog
from pydantic import Field

from ordering.order.order import Order, OrderStatus, next_status
from ordering.order.repository import OrderRepository
from shared.command import Command
from shared.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class AdvanceOrderStatus(Command):
    order_id: str
    updated_by: str | None = None
    note: str | None = Field(default=None, max_length=500)
    tracking_number: str | None = Field(default=None, max_length=100)
    estimated_delivery: datetime | None = None


class RecordFulfillmentHandler:
    def __init__(self, orders: OrderRepository):
        self.orders = orders

    def advance_order_status(self, command: AdvanceOrderStatus) -> Order:
        order = self.orders.get(command.order_id)

        tracking_number = (command.tracking_number or "").strip()
        if next_status(order.status) == OrderStatus.SHIPPED and not tracking_number:
            raise ValidationError({"tracking_number": ["Tracking number is required when shipping an order"]})

        previous = order.status
        order.advance(
            updated_by=command.updated_by,
            note=command.note,
            tracking_number=tracking_number or None,
            estimated_delivery=command.estimated_delivery,
        )
        self.orders.add(order)

        logger.info(
            "Order status changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=order.status.value,
            updated_by=command.updated_by,
        )
        return order
