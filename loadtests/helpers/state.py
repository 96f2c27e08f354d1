"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across
users. State tracks ids returned by the API so follow-up requests can
reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CatalogState:
    """Tracks what a simulated merchandiser has created."""

    category_id: str | None = None
    category_name: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class ShopperState:
    """Tracks a simulated shopper's browsing and checkout."""

    product_ids: list[str] = field(default_factory=list)
    cart_product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    reviewed_product_ids: set[str] = field(default_factory=set)


@dataclass
class FulfillmentState:
    """Tracks the order a simulated warehouse employee is working on."""

    order_id: str | None = None
    current_status: str | None = None
