"""Shopper and fulfillment load test scenarios.

Stateful journeys covering browsing, cart and wishlist churn, checkout,
reviews, and a warehouse employee walking orders to shipped.
"""

import random
import uuid

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import order_data, review_data
from loadtests.helpers.auth import bearer_headers
from loadtests.helpers.response import data, extract_error_detail
from loadtests.helpers.state import FulfillmentState, ShopperState


class BrowseAndCheckoutJourney(SequentialTaskSet):
    """Browse -> Wishlist -> Add to Cart -> Update Quantity -> Read Cart -> Place Order -> Review."""

    def on_start(self):
        self.state = ShopperState()
        self.headers = bearer_headers("user")

    @task
    def browse(self):
        with self.client.get(
            "/api/products",
            params={"page": random.randint(1, 3), "limit": 12, "sort": random.choice(["-created_at", "price"])},
            catch_response=True,
            name="GET /api/products",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()
            self.state.product_ids = [product["id"] for product in data(resp)["products"]]
            if not self.state.product_ids:
                self.interrupt()

    @task
    def wishlist(self):
        with self.client.post(
            "/api/wishlist/add",
            json={"product_id": random.choice(self.state.product_ids)},
            headers=self.headers,
            catch_response=True,
            name="POST /api/wishlist/add",
        ) as resp:
            if resp.status_code not in (200, 400):
                resp.failure(f"Wishlist add failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def add_to_cart(self):
        for product_id in random.sample(self.state.product_ids, k=min(3, len(self.state.product_ids))):
            with self.client.post(
                "/api/cart/add",
                json={"product_id": product_id, "quantity": random.randint(1, 3)},
                headers=self.headers,
                catch_response=True,
                name="POST /api/cart/add",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_product_ids.append(product_id)
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        if not self.state.cart_product_ids:
            self.interrupt()
        with self.client.put(
            f"/api/cart/item/{self.state.cart_product_ids[0]}",
            json={"quantity": random.randint(1, 10)},
            headers=self.headers,
            catch_response=True,
            name="PUT /api/cart/item/{id}",
        ) as resp:
            if resp.status_code not in (200, 404):
                resp.failure(f"Update quantity failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def read_cart(self):
        with self.client.get("/api/cart", headers=self.headers, catch_response=True, name="GET /api/cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"Read cart failed: {resp.status_code} {extract_error_detail(resp)}")
                return
            cart = data(resp)["cart"]
            line_sum = sum(line["current_price"] * line["quantity"] for line in cart["items"])
            if cart["total_price"] != line_sum:
                resp.failure(f"Cart total {cart['total_price']} does not match its lines ({line_sum})")

    @task
    def place_order(self):
        with self.client.post(
            "/api/orders",
            json=order_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = data(resp)["order"]["id"]
            elif resp.status_code == 400:
                # Every product in the cart went inactive in the meantime
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def review(self):
        product_id = random.choice(self.state.product_ids)
        if product_id in self.state.reviewed_product_ids:
            return
        with self.client.post(
            "/api/comments",
            json=review_data(product_id),
            headers=self.headers,
            catch_response=True,
            name="POST /api/comments",
        ) as resp:
            if resp.status_code == 201:
                self.state.reviewed_product_ids.add(product_id)
            else:
                resp.failure(f"Review failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CartChurnJourney(SequentialTaskSet):
    """Add -> Remove -> Remove Again -> Clear.

    Removing twice exercises the idempotent removal path.
    """

    def on_start(self):
        self.headers = bearer_headers("user")
        self.product_id = None

    @task
    def pick_product(self):
        resp = self.client.get("/api/products", params={"limit": 20}, name="GET /api/products")
        products = data(resp).get("products", []) if resp.status_code == 200 else []
        if not products:
            self.interrupt()
        self.product_id = random.choice(products)["id"]

    @task
    def add(self):
        self.client.post(
            "/api/cart/add",
            json={"product_id": self.product_id},
            headers=self.headers,
            name="POST /api/cart/add",
        )

    @task
    def remove_twice(self):
        for _ in range(2):
            with self.client.delete(
                f"/api/cart/item/{self.product_id}",
                headers=self.headers,
                catch_response=True,
                name="DELETE /api/cart/item/{id}",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Remove failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def clear(self):
        self.client.delete("/api/cart/clear", headers=self.headers, name="DELETE /api/cart/clear")
        self.interrupt()


class FulfillmentJourney(SequentialTaskSet):
    """Pick a pending order -> Confirm -> Pack -> Ship, occasionally cancelling instead."""

    def on_start(self):
        self.state = FulfillmentState()
        self.headers = bearer_headers("employee")

    @task
    def pick_order(self):
        with self.client.get(
            "/api/orders",
            params={"status": "pending", "limit": 20},
            headers=self.headers,
            catch_response=True,
            name="GET /api/orders?status=pending",
        ) as resp:
            orders = data(resp).get("orders", []) if resp.status_code == 200 else []
            if not orders:
                resp.success()
                self.interrupt()
            order = random.choice(orders)
            self.state.order_id = order["id"]
            self.state.current_status = order["order_status"]

    @task
    def advance(self):
        if random.random() < 0.1:
            self._cancel()
            self.interrupt()

        for _ in range(3):
            payload = {"note": "Load test"}
            if self.state.current_status == "packed":
                payload["tracking_number"] = f"LT{uuid.uuid4().hex[:10].upper()}"
            with self.client.put(
                f"/api/orders/{self.state.order_id}/status",
                json=payload,
                headers=self.headers,
                catch_response=True,
                name="PUT /api/orders/{id}/status",
            ) as resp:
                if resp.status_code != 200:
                    # Another employee may have moved or cancelled the order first
                    resp.success()
                    self.interrupt()
                self.state.current_status = data(resp)["order"]["order_status"]

    def _cancel(self):
        with self.client.put(
            f"/api/orders/{self.state.order_id}/cancel",
            json={"reason": "Out of stock"},
            headers=self.headers,
            catch_response=True,
            name="PUT /api/orders/{id}/cancel",
        ) as resp:
            if resp.status_code not in (200, 400):
                resp.failure(f"Cancel failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Storefront customer traffic only."""

    wait_time = between(0.5, 2.0)
    tasks = {BrowseAndCheckoutJourney: 3, CartChurnJourney: 2}


class WarehouseUser(HttpUser):
    """Employees working the pending order queue."""

    wait_time = between(1.0, 3.0)
    tasks = [FulfillmentJourney]
