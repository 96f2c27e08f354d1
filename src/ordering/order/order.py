"""Order aggregate — a purchase snapshot with a linear status machine.

Line items copy name, image and price at checkout time and are never
re-priced. Only the status moves, along a single path::

    pending → confirmed → packed → shipped

with two absorbing side exits reached through their own administrative
actions, never through ``next_status``::

    pending | confirmed | packed → cancelled
    shipped → returned

Every status change appends to ``status_history``; entries are never edited
or removed.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from shared.exceptions import ValidationError
from shared.repository import Document


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PACKED = "packed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"
    RETURNED = "returned"


class PaymentMethod(Enum):
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


# The forward path; shipped and both side exits have no successor
_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PACKED,
    OrderStatus.PACKED: OrderStatus.SHIPPED,
}

ABSORBING_STATES = frozenset({OrderStatus.CANCELLED, OrderStatus.RETURNED})

_CANCELLABLE_STATES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PACKED})

# Customers may only cancel before the order is packed
CUSTOMER_CANCELLABLE_STATES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})


def next_status(current) -> OrderStatus | None:
    """The single successor of ``current``, or ``None`` when it has none."""
    return _NEXT_STATUS.get(OrderStatus(current))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
class ShippingInfo(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=20)
    address: str = Field(min_length=1, max_length=250)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    country: str = Field(min_length=1, max_length=100)
    zip_code: str = Field(min_length=1, max_length=20)


class PaymentInfo(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    method: PaymentMethod = PaymentMethod.COD
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: str | None = None
    paid_at: datetime | None = None


class OrderItem(BaseModel):
    product_id: str
    name: str
    image: str = ""
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)

    @property
    def total(self) -> float:
        return self.price * self.quantity


class StatusChange(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    status: OrderStatus
    updated_by: str | None = None
    updated_at: datetime
    note: str | None = None


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
class Order(Document):
    user_id: str
    items: list[OrderItem] = Field(min_length=1)
    shipping_info: ShippingInfo
    payment_info: PaymentInfo = Field(default_factory=PaymentInfo)
    items_price: float = Field(default=0, ge=0)
    tax_price: float = Field(default=0, ge=0)
    shipping_price: float = Field(default=0, ge=0)
    total_price: float = Field(default=0, ge=0)
    order_status: OrderStatus = OrderStatus.PENDING
    status_history: list[StatusChange] = Field(default_factory=list)
    tracking_number: str | None = None
    estimated_delivery: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, items, shipping_info, payment_method=PaymentMethod.COD, tax_price=0, shipping_price=0):
        """Place an order in ``pending`` from already-priced line items."""
        if not items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        now = datetime.now(UTC)
        items = [OrderItem.model_validate(item) for item in items]
        items_price = sum(item.total for item in items)
        return cls(
            user_id=str(user_id),
            items=items,
            shipping_info=shipping_info,
            payment_info=PaymentInfo(method=payment_method),
            items_price=items_price,
            tax_price=tax_price,
            shipping_price=shipping_price,
            total_price=items_price + tax_price + shipping_price,
            order_status=OrderStatus.PENDING,
            status_history=[
                StatusChange(status=OrderStatus.PENDING, updated_by=str(user_id), updated_at=now, note="Order placed")
            ],
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def status(self) -> OrderStatus:
        return OrderStatus(self.order_status)

    @property
    def order_number(self) -> str:
        """Short customer-facing reference."""
        return f"SKY{self.id.replace('-', '')[-6:].upper()}"

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def is_owned_by(self, user_id) -> bool:
        return self.user_id == str(user_id)

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _record(self, status: OrderStatus, updated_by=None, note=None):
        now = datetime.now(UTC)
        self.order_status = status
        self.status_history = [
            *self.status_history,
            StatusChange(status=status, updated_by=updated_by, updated_at=now, note=note),
        ]
        self.updated_at = now

    def _refuse(self, target: OrderStatus):
        raise ValidationError({"status": [f"Cannot change status from {self.status.value} to {target.value}"]})

    def advance(self, updated_by=None, note=None, tracking_number=None, estimated_delivery=None) -> OrderStatus:
        """Move to the next status on the forward path."""
        target = next_status(self.status)
        if target is None:
            raise ValidationError({"status": [f"Order in {self.status.value} state has no next status"]})

        if tracking_number:
            self.tracking_number = tracking_number
        if estimated_delivery:
            self.estimated_delivery = estimated_delivery

        self._record(target, updated_by=updated_by, note=note)
        return target

    def cancel(self, updated_by=None, reason=None):
        if self.status not in _CANCELLABLE_STATES:
            self._refuse(OrderStatus.CANCELLED)
        self._record(OrderStatus.CANCELLED, updated_by=updated_by, note=reason)

    def mark_returned(self, updated_by=None, note=None):
        if self.status != OrderStatus.SHIPPED:
            self._refuse(OrderStatus.RETURNED)
        self._record(OrderStatus.RETURNED, updated_by=updated_by, note=note)

    def view(self) -> dict:
        return {**self.model_dump(), "order_number": self.order_number, "next_status": _value(next_status(self.status))}


def _value(status: OrderStatus | None) -> str | None:
    return status.value if status else None
