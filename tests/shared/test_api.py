"""Tests for pagination helpers, sort parsing and the error envelope."""

from pymongo import ASCENDING, DESCENDING
from shared.api import paginate, pagination_meta
from shared.exceptions import ValidationError
from shared.repository import parse_sort


class TestPagination:
    def test_paginate(self):
        assert paginate(1, 12) == (0, 12)
        assert paginate(3, 10) == (20, 10)
        assert paginate(0, 10) == (0, 10)

    def test_meta_on_a_middle_page(self):
        meta = pagination_meta(total=25, page=2, limit=10)

        assert meta == {
            "current_page": 2,
            "total_pages": 3,
            "total_items": 25,
            "items_per_page": 10,
            "has_next": True,
            "has_prev": True,
            "next_page": 3,
            "prev_page": 1,
        }

    def test_meta_without_results(self):
        meta = pagination_meta(total=0, page=1, limit=10)
        assert meta["total_pages"] == 0
        assert meta["has_next"] is False
        assert meta["prev_page"] is None


class TestParseSort:
    def test_descending_and_ascending(self):
        assert parse_sort("-price", {"price"}) == [("price", DESCENDING)]
        assert parse_sort("price", {"price"}) == [("price", ASCENDING)]

    def test_unknown_field_falls_back_to_default(self):
        assert parse_sort("-password", {"price"}) == [("created_at", DESCENDING)]
        assert parse_sort(None, {"price"}) == [("created_at", DESCENDING)]


class TestValidationError:
    def test_message_joins_field_messages(self):
        error = ValidationError({"name": ["Name is required"], "price": ["Valid price is required"]})
        assert error.message == "Name is required; Valid price is required"
        assert error.status_code == 400

    def test_plain_message(self):
        error = ValidationError("Cart is empty")
        assert error.messages == {"_entity": ["Cart is empty"]}


class TestEnvelope:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        assert response.headers["X-Request-ID"] == "req-42"

    def test_unknown_id_is_not_found_envelope(self, client, admin_headers):
        response = client.put("/api/categories/missing", json={"description": "x"}, headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Category not found"}
