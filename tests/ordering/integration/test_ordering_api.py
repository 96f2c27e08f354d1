"""API tests for the cart, wishlist and order endpoints."""

SHIPPING = {
    "name": "Asha Rao",
    "phone": "9876543210",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "country": "India",
    "zip_code": "560001",
}


def _checkout(client, headers, product, quantity=1):
    client.post("/api/cart/add", json={"product_id": product.id, "quantity": quantity}, headers=headers)
    response = client.post("/api/orders", json={"shipping_info": SHIPPING, "tax_price": 10}, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]["order"]


class TestCartEndpoints:
    def test_cart_requires_a_token(self, client):
        response = client.get("/api/cart")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_add_update_remove(self, client, user_headers, make_product):
        product = make_product(price=1000, discount=10)

        added = client.post("/api/cart/add", json={"product_id": product.id, "quantity": 2}, headers=user_headers)
        assert added.status_code == 200
        assert added.json()["message"] == "Item added to cart successfully"
        assert added.json()["data"]["cart"]["total_price"] == 1800

        updated = client.put(f"/api/cart/item/{product.id}", json={"quantity": 4}, headers=user_headers)
        assert updated.json()["data"]["cart"]["total_items"] == 4

        removed = client.delete(f"/api/cart/item/{product.id}", headers=user_headers)
        assert removed.json()["data"]["cart"]["items"] == []

    def test_quantity_above_cap_is_rejected(self, client, user_headers, make_product):
        product = make_product()

        response = client.post("/api/cart/add", json={"product_id": product.id, "quantity": 11}, headers=user_headers)

        assert response.status_code == 400
        assert "quantity" in response.json()["errors"]

    def test_growing_a_line_past_the_cap(self, client, user_headers, make_product):
        product = make_product()
        client.post("/api/cart/add", json={"product_id": product.id, "quantity": 10}, headers=user_headers)

        response = client.post("/api/cart/add", json={"product_id": product.id}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Maximum quantity per item is 10"

    def test_clear(self, client, user_headers, make_product):
        product = make_product()
        client.post("/api/cart/add", json={"product_id": product.id}, headers=user_headers)

        response = client.delete("/api/cart/clear", headers=user_headers)

        assert response.json() == {"success": True, "message": "Cart cleared successfully", "data": None}
        assert client.get("/api/cart", headers=user_headers).json()["data"]["cart"]["items"] == []


class TestWishlistEndpoints:
    def test_add_twice(self, client, user_headers, make_product):
        product = make_product()

        first = client.post("/api/wishlist/add", json={"product_id": product.id}, headers=user_headers)
        second = client.post("/api/wishlist/add", json={"product_id": product.id}, headers=user_headers)

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["message"] == "Product already in wishlist"

    def test_remove_from_missing_wishlist(self, client, user_headers):
        response = client.delete("/api/wishlist/item/p1", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["wishlist"]["items"] == []


class TestOrderEndpoints:
    def test_place_order_from_cart(self, client, user_headers, make_product):
        order = _checkout(client, user_headers, make_product(price=1000), quantity=2)

        assert order["order_status"] == "pending"
        assert order["total_price"] == 2010
        assert order["next_status"] == "confirmed"
        assert order["order_number"].startswith("SKY")
        assert client.get("/api/cart", headers=user_headers).json()["data"]["cart"]["items"] == []

    def test_empty_cart_cannot_be_ordered(self, client, user_headers):
        response = client.post("/api/orders", json={"shipping_info": SHIPPING}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"

    def test_other_customers_cannot_read_an_order(self, client, user_headers, auth_headers, make_product):
        order = _checkout(client, user_headers, make_product())

        response = client.get(f"/api/orders/{order['id']}", headers=auth_headers(user_id="user-2"))

        assert response.status_code == 403

    def test_employee_advances_order_to_shipped(self, client, user_headers, employee_headers, make_product):
        order = _checkout(client, user_headers, make_product())
        url = f"/api/orders/{order['id']}/status"

        client.put(url, json={}, headers=employee_headers)
        packed = client.put(url, json={}, headers=employee_headers)
        assert packed.json()["message"] == "Order status updated to packed"

        missing_tracking = client.put(url, json={}, headers=employee_headers)
        assert missing_tracking.status_code == 400

        shipped = client.put(url, json={"tracking_number": "BLR123"}, headers=employee_headers)
        assert shipped.json()["data"]["order"]["order_status"] == "shipped"
        assert shipped.json()["data"]["order"]["next_status"] is None

    def test_customer_cannot_advance_status(self, client, user_headers, make_product):
        order = _checkout(client, user_headers, make_product())

        response = client.put(f"/api/orders/{order['id']}/status", json={}, headers=user_headers)

        assert response.status_code == 403

    def test_customer_cancel_with_reason(self, client, user_headers, make_product):
        order = _checkout(client, user_headers, make_product())

        response = client.put(
            f"/api/orders/{order['id']}/cancel",
            json={"reason": "Found it cheaper"},
            headers=user_headers,
        )

        assert response.status_code == 200
        history = response.json()["data"]["order"]["status_history"]
        assert history[-1]["note"] == "Cancelled by customer: Found it cheaper"

    def test_return_requires_shipped_order(self, client, user_headers, admin_headers, make_product):
        order = _checkout(client, user_headers, make_product())

        response = client.put(f"/api/orders/{order['id']}/return", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot change status from pending to returned"

    def test_sales_summary_is_admin_only(self, client, user_headers, employee_headers, admin_headers, make_product):
        _checkout(client, user_headers, make_product(price=500))

        assert client.get("/api/orders/stats/summary", headers=employee_headers).status_code == 403

        summary = client.get("/api/orders/stats/summary", headers=admin_headers).json()["data"]["summary"]
        assert summary["total_orders"] == 1
        assert summary["total_revenue"] == 510

    def test_sales_analytics_is_admin_only(self, client, user_headers, employee_headers, admin_headers, make_product):
        _checkout(client, user_headers, make_product(name="Aurora TV", price=500), quantity=2)

        assert client.get("/api/orders/stats/analytics", headers=employee_headers).status_code == 403

        response = client.get("/api/orders/stats/analytics", params={"period": "day"}, headers=admin_headers)
        assert response.status_code == 200
        analytics = response.json()["data"]["analytics"]
        assert analytics["period"] == "day"
        assert analytics["sales_over_time"][0]["revenue"] == 1010
        assert analytics["top_products"][0]["name"] == "Aurora TV"
        assert analytics["top_products"][0]["total_sold"] == 2

    def test_sales_analytics_with_invalid_period(self, client, admin_headers):
        response = client.get("/api/orders/stats/analytics", params={"period": "quarter"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid period: quarter"

    def test_list_orders_with_invalid_status(self, client, admin_headers):
        response = client.get("/api/orders", params={"status": "lost"}, headers=admin_headers)

        assert response.status_code == 400


class TestCamelCaseBodies:
    def test_add_to_cart_with_product_id_key(self, client, user_headers, make_product):
        product = make_product(price=500)

        response = client.post("/api/cart/add", json={"productId": product.id, "quantity": 2}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["data"]["cart"]["total_price"] == 1000

    def test_add_to_wishlist_with_product_id_key(self, client, user_headers, make_product):
        product = make_product()

        response = client.post("/api/wishlist/add", json={"productId": product.id}, headers=user_headers)

        assert response.status_code == 200
        assert len(response.json()["data"]["wishlist"]["items"]) == 1

    def test_place_order_with_camel_case_shipping(self, client, user_headers, make_product):
        product = make_product(price=1000)
        client.post("/api/cart/add", json={"productId": product.id}, headers=user_headers)
        shipping = {**{key: value for key, value in SHIPPING.items() if key != "zip_code"}, "zipCode": "560001"}

        response = client.post(
            "/api/orders",
            json={"shippingInfo": shipping, "paymentMethod": "upi", "taxPrice": 18, "shippingPrice": 50},
            headers=user_headers,
        )

        assert response.status_code == 201
        order = response.json()["data"]["order"]
        assert order["shipping_info"]["zip_code"] == "560001"
        assert order["payment_info"]["method"] == "upi"
        assert order["total_price"] == 1068

    def test_tracking_number_key_when_shipping(self, client, user_headers, employee_headers, make_product):
        order = _checkout(client, user_headers, make_product())
        for _ in range(2):
            client.put(f"/api/orders/{order['id']}/status", json={}, headers=employee_headers)

        response = client.put(
            f"/api/orders/{order['id']}/status", json={"trackingNumber": "BLR123"}, headers=employee_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["order"]["tracking_number"] == "BLR123"
