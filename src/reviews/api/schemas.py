"""Pydantic request schemas for the Reviews API."""

from __future__ import annotations

from pydantic import Field

from reviews.comment.comment import CommentStatus
from shared.api import ImageBody, RequestBody


class SubmitCommentRequest(RequestBody):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "prod-001",
                    "rating": 5,
                    "title": "Brilliant picture",
                    "comment": "Colours are vivid and the smart apps load quickly.",
                }
            ]
        }
    }

    product_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=100)
    comment: str = Field(..., min_length=1, max_length=1000)
    images: list[ImageBody] = Field(default_factory=list)


class EditCommentRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"rating": 4, "comment": "Still great after a month."}]}}

    rating: int | None = Field(None, ge=1, le=5)
    title: str | None = Field(None, min_length=1, max_length=100)
    comment: str | None = Field(None, min_length=1, max_length=1000)
    images: list[ImageBody] | None = None


class AddReplyRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"comment": "Thanks for the detailed review!"}]}}

    comment: str = Field(..., min_length=1, max_length=500)


class VoteRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"vote": "helpful"}]}}

    vote: str


class UpdateCommentStatusRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"status": "approved"}]}}

    status: CommentStatus
