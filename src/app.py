"""SkyElectroTech storefront FastAPI application.

Catalog, ordering and reviews routers are mounted under ``/api``. Handlers
are synchronous and run on FastAPI's threadpool; each request builds its own
repositories around the database returned by ``shared.db.get_database``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.api import bulk_router, category_router, product_router
from ordering.api import cart_router, order_router, wishlist_router
from reviews.api import comment_router
from shared.api import register_exception_handlers
from shared.config import get_settings
from shared.db import get_database, setup_db
from shared.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = app.dependency_overrides.get(get_database, get_database)()
    setup_db(database)
    logger.info("Storefront started", env=get_settings().env, database=database.name)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="SkyElectroTech API",
        description="Storefront — catalog, cart, wishlist, orders and reviews",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request id to every log line emitted while serving the request."""
        clear_context()
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        add_context(request_id=request_id, method=request.method, path=request.url.path)

        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.debug(
            "Request served",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    for router in (
        product_router,
        category_router,
        bulk_router,
        cart_router,
        wishlist_router,
        order_router,
        comment_router,
    ):
        app.include_router(router, prefix="/api")

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "env": settings.env})

    return app


app = create_app()
