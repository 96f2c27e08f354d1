"""Order placement — checkout of the user's cart into a pending order."""

import structlog
from pydantic import Field

from catalog.product.repository import ProductRepository
from ordering.cart.repository import CartRepository
from ordering.order.order import Order, PaymentMethod, ShippingInfo
from ordering.order.repository import OrderRepository
from shared.command import Command
from shared.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class PlaceOrder(Command):
    user_id: str
    shipping_info: ShippingInfo
    payment_method: PaymentMethod = PaymentMethod.COD
    tax_price: float = Field(default=0, ge=0)
    shipping_price: float = Field(default=0, ge=0)


class PlaceOrderHandler:
    def __init__(self, orders: OrderRepository, carts: CartRepository, products: ProductRepository):
        self.orders = orders
        self.carts = carts
        self.products = products

    def place_order(self, command: PlaceOrder) -> Order:
        cart = self.carts.get_for_user(command.user_id)
        if cart is None:
            raise ValidationError({"cart": ["Cart is empty"]})

        # Price against live products, dropping lines that went inactive
        products = self.products.active_by_ids(item.product_id for item in cart.items)
        self.carts.reconcile(cart, products)
        if not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        items = []
        for line in cart.priced(products)["items"]:
            product = line["product"]
            images = product["images"]
            items.append(
                {
                    "product_id": product["id"],
                    "name": product["name"],
                    "image": images[0]["url"] if images else "",
                    "price": line["current_price"],
                    "quantity": line["quantity"],
                }
            )

        order = Order.create(
            user_id=command.user_id,
            items=items,
            shipping_info=command.shipping_info,
            payment_method=command.payment_method,
            tax_price=command.tax_price,
            shipping_price=command.shipping_price,
        )
        self.orders.add(order)
        self.carts.remove(cart)

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=order.user_id,
            total_price=order.total_price,
            item_count=order.item_count,
        )
        return order
