"""Request bodies, response envelope, pagination and exception translation for the API.

Every endpoint answers ``{success, message, data}``; every error answers
``{success: false, message}`` (plus ``errors`` for validation failures).
Request bodies accept the storefront client's camelCase keys
(``productId``, ``zipCode``) as well as their snake_case field names.
"""

import math

import pydantic
import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.config import get_settings
from shared.exceptions import StorefrontError, ValidationError

logger = structlog.get_logger(__name__)


class RequestBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageBody(RequestBody):
    url: str = Field(..., min_length=1, max_length=500)
    public_id: str = Field(..., min_length=1, max_length=255)


def respond(data=None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": jsonable_encoder(data)},
    )


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=content)


def paginate(page: int = 1, limit: int = 10) -> tuple[int, int]:
    """Return ``(skip, limit)`` for a 1-based page."""
    page = max(page, 1)
    return (page - 1) * limit, limit


def pagination_meta(total: int, page: int, limit: int) -> dict:
    total_pages = math.ceil(total / limit) if limit else 0
    has_next = page < total_pages
    has_prev = page > 1
    return {
        "current_page": page,
        "total_pages": total_pages,
        "total_items": total,
        "items_per_page": limit,
        "has_next": has_next,
        "has_prev": has_prev,
        "next_page": page + 1 if has_next else None,
        "prev_page": page - 1 if has_prev else None,
    }


def _field_errors(errors) -> dict[str, list[str]]:
    messages: dict[str, list[str]] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "_entity"
        messages.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    """Translate storefront and validation errors into the error envelope."""

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return error_response(exc.status_code, exc.message, exc.messages)

    @app.exception_handler(StorefrontError)
    async def _storefront_error(request: Request, exc: StorefrontError):
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
            message = exc.message if get_settings().is_development else "Server Error"
            return error_response(exc.status_code, message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        messages = _field_errors(exc.errors())
        return error_response(400, ValidationError(messages).message, messages)

    @app.exception_handler(pydantic.ValidationError)
    async def _model_validation_error(request: Request, exc: pydantic.ValidationError):
        messages = _field_errors(exc.errors())
        return error_response(400, ValidationError(messages).message, messages)

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path)
        message = str(exc) if get_settings().is_development else "Server Error"
        return error_response(500, message)
