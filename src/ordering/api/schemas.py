"""Pydantic request schemas for the Ordering API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ordering.cart.cart import MAX_QUANTITY_PER_ITEM
from ordering.order.order import PaymentMethod
from shared.api import RequestBody


# ---------------------------------------------------------------------------
# Cart and Wishlist Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"productId": "prod-001", "quantity": 2}]}}

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY_PER_ITEM)


class UpdateCartItemRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}

    quantity: int = Field(..., ge=1, le=MAX_QUANTITY_PER_ITEM)


class AddToWishlistRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"productId": "prod-001"}]}}

    product_id: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class ShippingInfoBody(RequestBody):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    address: str = Field(..., min_length=1, max_length=250)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)


class PlaceOrderRequest(RequestBody):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shippingInfo": {
                        "name": "Asha Rao",
                        "phone": "9876543210",
                        "address": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "country": "India",
                        "zipCode": "560001",
                    },
                    "paymentMethod": "cod",
                    "taxPrice": 180,
                    "shippingPrice": 50,
                }
            ]
        }
    }

    shipping_info: ShippingInfoBody
    payment_method: PaymentMethod = PaymentMethod.COD
    tax_price: float = Field(0, ge=0)
    shipping_price: float = Field(0, ge=0)


class AdvanceOrderStatusRequest(RequestBody):
    model_config = {
        "json_schema_extra": {"examples": [{"note": "Handed to courier", "trackingNumber": "BLR123456789"}]},
    }

    note: str | None = Field(None, max_length=500)
    tracking_number: str | None = Field(None, max_length=100)
    estimated_delivery: datetime | None = None


class CancelOrderRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"reason": "Ordered by mistake"}]}}

    reason: str | None = Field(None, max_length=500)


class ReturnOrderRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"note": "Customer refused delivery"}]}}

    note: str | None = Field(None, max_length=500)
