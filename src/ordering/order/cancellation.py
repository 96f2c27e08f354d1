"""Order cancellation and returns — the administrative side exits."""

import structlog
from pydantic import Field

from ordering.order.order import CUSTOMER_CANCELLABLE_STATES, Order
from ordering.order.repository import OrderRepository
from shared.command import Command
from shared.exceptions import Forbidden, ValidationError

logger = structlog.get_logger(__name__)


class CancelOrder(Command):
    order_id: str
    cancelled_by: str
    by_staff: bool = False
    reason: str | None = Field(default=None, max_length=500)


class MarkOrderReturned(Command):
    order_id: str
    updated_by: str
    note: str | None = Field(default=None, max_length=500)


class CancelOrderHandler:
    def __init__(self, orders: OrderRepository):
        self.orders = orders

    def cancel_order(self, command: CancelOrder) -> Order:
        order = self.orders.get(command.order_id)
        reason = (command.reason or "").strip()

        if not command.by_staff:
            if not order.is_owned_by(command.cancelled_by):
                raise Forbidden("Access denied")
            if order.status not in CUSTOMER_CANCELLABLE_STATES:
                raise ValidationError({"status": ["Order cannot be cancelled at this stage"]})
            if not reason:
                raise ValidationError({"reason": ["Cancellation reason is required"]})
            reason = f"Cancelled by customer: {reason}"

        order.cancel(updated_by=command.cancelled_by, reason=reason or None)
        self.orders.add(order)

        logger.info("Order cancelled", order_id=order.id, cancelled_by=command.cancelled_by, by_staff=command.by_staff)
        return order

    def mark_order_returned(self, command: MarkOrderReturned) -> Order:
        order = self.orders.get(command.order_id)
        order.mark_returned(updated_by=command.updated_by, note=command.note)
        self.orders.add(order)

        logger.info("Order returned", order_id=order.id, updated_by=command.updated_by)
        return order
