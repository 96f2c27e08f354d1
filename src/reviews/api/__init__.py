"""Reviews API package."""

from reviews.api.routes import comment_router

__all__ = ["comment_router"]
