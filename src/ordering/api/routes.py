"""FastAPI routes for the Ordering context — cart, wishlist and orders."""

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from catalog.product.repository import ProductRepository
from ordering.api.schemas import (
    AddToCartRequest,
    AddToWishlistRequest,
    AdvanceOrderStatusRequest,
    CancelOrderRequest,
    PlaceOrderRequest,
    ReturnOrderRequest,
    UpdateCartItemRequest,
)
from ordering.cart.items import AddToCart, ClearCart, ManageCartItemsHandler, RemoveFromCart, UpdateCartItem
from ordering.cart.repository import CartRepository
from ordering.order.cancellation import CancelOrder, CancelOrderHandler, MarkOrderReturned
from ordering.order.creation import PlaceOrder, PlaceOrderHandler
from ordering.order.fulfillment import AdvanceOrderStatus, RecordFulfillmentHandler
from ordering.order.queries import OrderQueries
from ordering.order.repository import OrderRepository
from ordering.wishlist.management import AddToWishlist, ClearWishlist, ManageWishlistHandler, RemoveFromWishlist
from ordering.wishlist.repository import WishlistRepository
from shared.api import respond
from shared.auth import Actor, admin_only, admin_or_employee, get_current_actor
from shared.db import get_database


def get_cart_handler(database: Database = Depends(get_database)) -> ManageCartItemsHandler:
    return ManageCartItemsHandler(CartRepository(database), ProductRepository(database))


def get_wishlist_handler(database: Database = Depends(get_database)) -> ManageWishlistHandler:
    return ManageWishlistHandler(WishlistRepository(database), ProductRepository(database))


def get_orders(database: Database = Depends(get_database)) -> OrderRepository:
    return OrderRepository(database)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("")
def get_cart(
    actor: Actor = Depends(get_current_actor),
    handler: ManageCartItemsHandler = Depends(get_cart_handler),
):
    return respond({"cart": handler.get_cart(actor.id)}, "Cart retrieved successfully")


@cart_router.post("/add")
def add_to_cart(
    body: AddToCartRequest,
    actor: Actor = Depends(get_current_actor),
    handler: ManageCartItemsHandler = Depends(get_cart_handler),
):
    cart = handler.add_to_cart(AddToCart(user_id=actor.id, product_id=body.product_id, quantity=body.quantity))
    return respond({"cart": cart}, "Item added to cart successfully")


@cart_router.put("/item/{product_id}")
def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    actor: Actor = Depends(get_current_actor),
    handler: ManageCartItemsHandler = Depends(get_cart_handler),
):
    cart = handler.update_cart_item(UpdateCartItem(user_id=actor.id, product_id=product_id, quantity=body.quantity))
    return respond({"cart": cart}, "Cart item updated successfully")


@cart_router.delete("/item/{product_id}")
def remove_from_cart(
    product_id: str,
    actor: Actor = Depends(get_current_actor),
    handler: ManageCartItemsHandler = Depends(get_cart_handler),
):
    cart = handler.remove_from_cart(RemoveFromCart(user_id=actor.id, product_id=product_id))
    return respond({"cart": cart}, "Item removed from cart successfully")


@cart_router.delete("/clear")
def clear_cart(
    actor: Actor = Depends(get_current_actor),
    handler: ManageCartItemsHandler = Depends(get_cart_handler),
):
    handler.clear_cart(ClearCart(user_id=actor.id))
    return respond(None, "Cart cleared successfully")


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@wishlist_router.get("")
def get_wishlist(
    actor: Actor = Depends(get_current_actor),
    handler: ManageWishlistHandler = Depends(get_wishlist_handler),
):
    return respond({"wishlist": handler.get_wishlist(actor.id)}, "Wishlist retrieved successfully")


@wishlist_router.post("/add")
def add_to_wishlist(
    body: AddToWishlistRequest,
    actor: Actor = Depends(get_current_actor),
    handler: ManageWishlistHandler = Depends(get_wishlist_handler),
):
    wishlist = handler.add_to_wishlist(AddToWishlist(user_id=actor.id, product_id=body.product_id))
    return respond({"wishlist": wishlist}, "Item added to wishlist successfully")


@wishlist_router.delete("/item/{product_id}")
def remove_from_wishlist(
    product_id: str,
    actor: Actor = Depends(get_current_actor),
    handler: ManageWishlistHandler = Depends(get_wishlist_handler),
):
    wishlist = handler.remove_from_wishlist(RemoveFromWishlist(user_id=actor.id, product_id=product_id))
    return respond({"wishlist": wishlist}, "Item removed from wishlist successfully")


@wishlist_router.delete("/clear")
def clear_wishlist(
    actor: Actor = Depends(get_current_actor),
    handler: ManageWishlistHandler = Depends(get_wishlist_handler),
):
    handler.clear_wishlist(ClearWishlist(user_id=actor.id))
    return respond(None, "Wishlist cleared successfully")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("")
def place_order(
    body: PlaceOrderRequest,
    actor: Actor = Depends(get_current_actor),
    database: Database = Depends(get_database),
):
    handler = PlaceOrderHandler(OrderRepository(database), CartRepository(database), ProductRepository(database))
    command = PlaceOrder(
        user_id=actor.id,
        shipping_info=body.shipping_info.model_dump(),
        payment_method=body.payment_method,
        tax_price=body.tax_price,
        shipping_price=body.shipping_price,
    )
    order = handler.place_order(command)
    return respond({"order": order.view()}, "Order placed successfully", status_code=201)


@order_router.get("")
def list_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    actor: Actor = Depends(get_current_actor),
    orders: OrderRepository = Depends(get_orders),
):
    return respond(OrderQueries(orders).list_orders(actor, status=status, page=page, limit=limit))


@order_router.get("/stats/summary")
def sales_summary(
    actor: Actor = Depends(admin_only),
    orders: OrderRepository = Depends(get_orders),
):
    return respond({"summary": OrderQueries(orders).sales_summary()})


@order_router.get("/stats/analytics")
def sales_analytics(
    period: str = "month",
    year: int | None = Query(None, ge=2000, le=9999),
    limit: int = Query(10, ge=1, le=50),
    actor: Actor = Depends(admin_only),
    orders: OrderRepository = Depends(get_orders),
):
    analytics = OrderQueries(orders).sales_analytics(period=period, year=year, limit=limit)
    return respond({"analytics": analytics}, "Sales analytics retrieved successfully")


@order_router.get("/{order_id}")
def get_order(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    orders: OrderRepository = Depends(get_orders),
):
    order = OrderQueries(orders).get_order(order_id, actor)
    return respond({"order": order.view()})


@order_router.put("/{order_id}/status")
def advance_order_status(
    order_id: str,
    body: AdvanceOrderStatusRequest,
    actor: Actor = Depends(admin_or_employee),
    orders: OrderRepository = Depends(get_orders),
):
    command = AdvanceOrderStatus(
        order_id=order_id,
        updated_by=actor.id,
        note=body.note,
        tracking_number=body.tracking_number,
        estimated_delivery=body.estimated_delivery,
    )
    order = RecordFulfillmentHandler(orders).advance_order_status(command)
    return respond({"order": order.view()}, f"Order status updated to {order.status.value}")


@order_router.put("/{order_id}/cancel")
def cancel_order(
    order_id: str,
    body: CancelOrderRequest,
    actor: Actor = Depends(get_current_actor),
    orders: OrderRepository = Depends(get_orders),
):
    command = CancelOrder(order_id=order_id, cancelled_by=actor.id, by_staff=actor.is_staff, reason=body.reason)
    order = CancelOrderHandler(orders).cancel_order(command)
    return respond({"order": order.view()}, "Order cancelled successfully")


@order_router.put("/{order_id}/return")
def return_order(
    order_id: str,
    body: ReturnOrderRequest,
    actor: Actor = Depends(admin_or_employee),
    orders: OrderRepository = Depends(get_orders),
):
    order = CancelOrderHandler(orders).mark_order_returned(
        MarkOrderReturned(order_id=order_id, updated_by=actor.id, note=body.note)
    )
    return respond({"order": order.view()}, "Order marked as returned")
