"""API tests for products, categories and the bulk upload endpoints."""

import csv
import io

from catalog.bulk.rows import COLUMNS


def _csv(*rows):
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def _product_payload(category_id, **overrides):
    payload = {
        "name": "Aurora 55 4K Smart TV",
        "description": "55 inch 4K UHD smart television",
        "price": 54999,
        "discount": 10,
        "category_id": category_id,
        "sku": "TELAUAUR001",
    }
    payload.update(overrides)
    return payload


class TestProductEndpoints:
    def test_list_products_is_public(self, client, make_product):
        make_product(price=1000, discount=15)

        response = client.get("/api/products")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["products"][0]["discount_price"] == 850
        assert body["data"]["pagination"]["total_items"] == 1

    def test_create_product_as_admin(self, client, admin_headers, category):
        response = client.post("/api/products", json=_product_payload(category.id), headers=admin_headers)

        assert response.status_code == 201
        product = response.json()["data"]["product"]
        assert product["sku"] == "TELAUAUR001"
        assert product["created_by"] == "admin-1"

    def test_create_product_requires_admin(self, client, user_headers, category):
        response = client.post("/api/products", json=_product_payload(category.id), headers=user_headers)

        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_create_product_requires_token(self, client, category):
        response = client.post("/api/products", json=_product_payload(category.id))

        assert response.status_code == 401
        assert response.json()["message"] == "Access denied. No token provided."

    def test_invalid_payload_is_a_validation_error(self, client, admin_headers, category):
        response = client.post(
            "/api/products",
            json=_product_payload(category.id, discount=150),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "discount" in response.json()["errors"]

    def test_inactive_product_is_not_found(self, client, make_product):
        product = make_product(is_active=False)

        response = client.get(f"/api/products/{product.id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_deactivate_product(self, client, admin_headers, make_product):
        product = make_product()

        response = client.put(f"/api/products/{product.id}/deactivate", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["product"]["is_active"] is False

    def test_list_products_with_query_filters(self, client, make_product):
        kept = make_product(brand="Aurora", price=800, is_featured=True, ratings={"average": 4.2, "count": 5})
        make_product(brand="Aurora", price=800, ratings={"average": 4.2, "count": 5})
        make_product(brand="Aurora", price=2500, is_featured=True, ratings={"average": 4.2, "count": 5})

        response = client.get(
            "/api/products",
            params={"brand": "aur", "minPrice": 500, "maxPrice": 1000, "rating": 4, "featured": "true"},
        )

        assert response.status_code == 200
        assert [product["id"] for product in response.json()["data"]["products"]] == [kept.id]

    def test_search_endpoint(self, client, make_product):
        match = make_product(name="Aurora Soundbar")
        make_product(name="Pulse Earbuds")

        response = client.get("/api/products/search", params={"q": "soundbar"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert [product["id"] for product in data["products"]] == [match.id]
        assert data["search_query"] == "soundbar"
        assert data["pagination"]["total_items"] == 1

    def test_search_without_query(self, client):
        response = client.get("/api/products/search")

        assert response.status_code == 400
        assert response.json()["message"] == "Search query is required"

    def test_featured_endpoint(self, client, make_product):
        featured = make_product(is_featured=True)
        make_product()

        response = client.get("/api/products/featured")

        assert response.status_code == 200
        assert response.json()["message"] == "Featured products retrieved successfully"
        assert [product["id"] for product in response.json()["data"]["products"]] == [featured.id]


class TestCategoryEndpoints:
    def test_create_and_list(self, client, admin_headers):
        created = client.post("/api/categories", json={"name": "Audio"}, headers=admin_headers)
        listed = client.get("/api/categories")

        assert created.status_code == 201
        assert [category["name"] for category in listed.json()["data"]["categories"]] == ["Audio"]

    def test_duplicate_name_is_rejected(self, client, admin_headers, category):
        response = client.post("/api/categories", json={"name": category.name.upper()}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Category with this name already exists"


class TestBulkUploadEndpoints:
    def test_upload_reports_per_row_outcome(self, client, admin_headers, make_category, products):
        make_category("Audio")
        content = _csv(
            {"name": "Earbuds", "description": "Wireless", "price": "3499", "category": "Audio", "sku": "AUD-1"},
            {"name": "Drone", "description": "Flying", "price": "9999", "category": "Drones", "sku": "DRN-1"},
        )

        response = client.post(
            "/api/bulk-upload/products",
            files={"file": ("products.csv", content.encode(), "text/csv")},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Bulk upload completed. 1 products created, 1 failed."
        assert body["data"]["errors"] == [{"row": 3, "product": "Drone", "errors": ['Category "Drones" not found']}]
        assert products.count() == 1

    def test_upload_accepts_byte_order_mark(self, client, admin_headers, make_category):
        make_category("Audio")
        content = _csv({"name": "Earbuds", "description": "Wireless", "price": "3499", "category": "Audio"})

        response = client.post(
            "/api/bulk-upload/products",
            files={"file": ("products.csv", ("\ufeff" + content).encode(), "text/csv")},
            headers=admin_headers,
        )

        assert response.json()["data"]["successful"] == 1

    def test_missing_file(self, client, admin_headers):
        response = client.post("/api/bulk-upload/products", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No CSV file provided"

    def test_non_csv_file_is_rejected(self, client, admin_headers):
        response = client.post(
            "/api/bulk-upload/products",
            files={"file": ("products.xlsx", b"binary", "application/octet-stream")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only CSV files are allowed"

    def test_empty_file_is_rejected(self, client, admin_headers):
        response = client.post(
            "/api/bulk-upload/products",
            files={"file": ("products.csv", b"", "text/csv")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "CSV file is empty or invalid"

    def test_upload_requires_admin(self, client, employee_headers):
        response = client.post(
            "/api/bulk-upload/products",
            files={"file": ("products.csv", b"name\n", "text/csv")},
            headers=employee_headers,
        )

        assert response.status_code == 403

    def test_template_download(self, client, admin_headers):
        response = client.get("/api/bulk-upload/template", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "bulk-product-upload-template.csv" in response.headers["content-disposition"]
        assert response.text.splitlines()[0] == ",".join(COLUMNS)

    def test_export_without_products_is_not_found(self, client, admin_headers):
        response = client.get("/api/bulk-upload/export", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "No products found to export"

    def test_bulk_update_requires_updates(self, client, admin_headers):
        response = client.put("/api/bulk-upload/products", json={"updates": []}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Updates array is required"

    def test_bulk_delete(self, client, admin_headers, make_product):
        first = make_product()
        second = make_product()

        response = client.request(
            "DELETE",
            "/api/bulk-upload/products",
            json={"product_ids": [first.id, second.id]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"deleted_count": 2}


class TestCamelCaseBodies:
    def test_create_product_with_camel_case_keys(self, client, admin_headers, category):
        payload = {
            "name": "Pulse Earbuds",
            "description": "Wireless earbuds",
            "price": 3499,
            "originalPrice": 3999,
            "categoryId": category.id,
            "sku": "AUD-PULSE",
            "isFeatured": True,
            "images": [{"url": "https://img.example/pulse.jpg", "publicId": "pulse"}],
        }

        response = client.post("/api/products", json=payload, headers=admin_headers)

        assert response.status_code == 201
        product = response.json()["data"]["product"]
        assert product["category_id"] == category.id
        assert product["original_price"] == 3999
        assert product["is_featured"] is True
        assert product["images"][0]["public_id"] == "pulse"

    def test_bulk_update_with_camel_case_keys(self, client, admin_headers, products, make_product):
        product = make_product()

        response = client.put(
            "/api/bulk-upload/products",
            json={"updates": [{"id": product.id, "isFeatured": True, "price": 1999}]},
            headers=admin_headers,
        )

        assert response.json()["data"]["successful"] == 1
        stored = products.get(product.id)
        assert stored.is_featured is True
        assert stored.price == 1999

    def test_bulk_delete_with_product_ids_key(self, client, admin_headers, make_product):
        product = make_product()

        response = client.request(
            "DELETE", "/api/bulk-upload/products", json={"productIds": [product.id]}, headers=admin_headers
        )

        assert response.json()["data"] == {"deleted_count": 1}
