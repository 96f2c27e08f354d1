"""Catalog load test scenarios.

Admin journeys: building a category with products, running a bulk CSV upload
that mixes good and bad rows, and exporting the catalog.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import bulk_csv, category_data, product_data
from loadtests.helpers.auth import bearer_headers
from loadtests.helpers.response import data, extract_error_detail
from loadtests.helpers.state import CatalogState


class CatalogBuilderJourney(SequentialTaskSet):
    """Create Category -> Create Products -> Update Price -> Deactivate One."""

    def on_start(self):
        self.state = CatalogState()
        self.headers = bearer_headers("admin")

    @task
    def create_category(self):
        payload = category_data()
        with self.client.post(
            "/api/categories",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="POST /api/categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_id = data(resp)["category"]["id"]
                self.state.category_name = payload["name"]
            else:
                resp.failure(f"Create category failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_products(self):
        for _ in range(3):
            with self.client.post(
                "/api/products",
                json=product_data(self.state.category_id),
                headers=self.headers,
                catch_response=True,
                name="POST /api/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(data(resp)["product"]["id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def reprice_product(self):
        if not self.state.product_ids:
            self.interrupt()
        with self.client.put(
            f"/api/products/{random.choice(self.state.product_ids)}",
            json={"discount": random.choice([5, 10, 20])},
            headers=self.headers,
            catch_response=True,
            name="PUT /api/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def deactivate_product(self):
        with self.client.put(
            f"/api/products/{self.state.product_ids[-1]}/deactivate",
            headers=self.headers,
            catch_response=True,
            name="PUT /api/products/{id}/deactivate",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Deactivate failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class BulkUploadJourney(SequentialTaskSet):
    """Create Category -> Upload CSV -> Export Catalog.

    Each upload carries one row with an unknown category, so every run
    exercises per-row failure isolation.
    """

    def on_start(self):
        self.state = CatalogState()
        self.headers = bearer_headers("admin")

    @task
    def create_category(self):
        payload = category_data()
        with self.client.post(
            "/api/categories",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="POST /api/categories",
        ) as resp:
            if resp.status_code == 201:
                self.state.category_name = payload["name"]
            else:
                resp.failure(f"Create category failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def upload(self):
        content = bulk_csv(self.state.category_name, rows=5, bad_rows=1)
        with self.client.post(
            "/api/bulk-upload/products",
            files={"file": ("products.csv", content.encode(), "text/csv")},
            headers=self.headers,
            catch_response=True,
            name="POST /api/bulk-upload/products",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Bulk upload failed: {resp.status_code} {extract_error_detail(resp)}")
            elif data(resp)["successful"] != 4:
                resp.failure(f"Bulk upload created {data(resp)['successful']} of 4 products")

    @task
    def export(self):
        with self.client.get(
            "/api/bulk-upload/export",
            headers=self.headers,
            catch_response=True,
            name="GET /api/bulk-upload/export",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Export failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogAdminUser(HttpUser):
    """Merchandising traffic only."""

    wait_time = between(1.0, 3.0)
    tasks = {CatalogBuilderJourney: 3, BulkUploadJourney: 1}
