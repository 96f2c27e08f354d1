"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages. Errors
answer the envelope ``{"success": false, "message": "...", "errors": {...}}``
where ``errors`` is present only for validation failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message suitable for Locust failure messages and log lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    errors = body.get("errors")
    if isinstance(errors, dict):
        return " | ".join(f"{field}: {'; '.join(messages)}" for field, messages in errors.items())

    if "message" in body:
        return str(body["message"])

    return str(body)[:300]


def data(response: Response) -> dict:
    """The ``data`` member of a success envelope."""
    return response.json().get("data") or {}
