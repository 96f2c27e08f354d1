"""FastAPI endpoints for the Catalog context: products, categories and bulk upload."""

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import Response
from pymongo.database import Database

from catalog.api.schemas import (
    BulkDeleteRequest,
    BulkUpdateRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from catalog.bulk.export import EXPORT_FILENAME, TEMPLATE_FILENAME, ExportHandler, template_csv
from catalog.bulk.maintenance import BulkDeleteProducts, BulkMaintenanceHandler, BulkUpdateProducts
from catalog.bulk.upload import BulkUploadHandler, BulkUploadProducts
from catalog.category.management import (
    CreateCategory,
    DeactivateCategory,
    ManageCategoryHandler,
    UpdateCategory,
)
from catalog.category.repository import CategoryRepository
from catalog.product.creation import CreateProduct, CreateProductHandler
from catalog.product.details import ProductDetailsHandler, UpdateProductDetails
from catalog.product.lifecycle import ActivateProduct, DeactivateProduct, ManageLifecycleHandler
from catalog.product.repository import ProductFilters, ProductRepository
from shared.api import respond
from shared.auth import Actor, admin_only
from shared.db import get_database
from shared.exceptions import ValidationError

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
bulk_router = APIRouter(prefix="/bulk-upload", tags=["bulk-upload"])


def get_products(database: Database = Depends(get_database)) -> ProductRepository:
    return ProductRepository(database)


def get_categories(database: Database = Depends(get_database)) -> CategoryRepository:
    return CategoryRepository(database)


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# --- Product endpoints ---


@product_router.get("")
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    category: str | None = None,
    brand: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    rating: float | None = Query(None, ge=0, le=5),
    search: str | None = None,
    featured: bool = False,
    sort: str | None = None,
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    filters = ProductFilters(
        category_id=category,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        min_rating=rating,
        search=search,
        featured=featured,
    )
    handler = ProductDetailsHandler(products, categories)
    return respond(handler.list_products(page=page, limit=limit, sort=sort, filters=filters))


@product_router.get("/search")
def search_products(
    q: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    results = ProductDetailsHandler(products, categories).search_products(q, page=page, limit=limit)
    return respond(results, "Search results retrieved successfully")


@product_router.get("/featured")
def featured_products(
    limit: int = Query(8, ge=1, le=50),
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    featured = ProductDetailsHandler(products, categories).featured_products(limit=limit)
    return respond({"products": featured}, "Featured products retrieved successfully")


@product_router.get("/{product_id}")
def get_product(
    product_id: str,
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    product = ProductDetailsHandler(products, categories).get_product(product_id)
    return respond({"product": {**product.model_dump(), "discount_price": product.discount_price}})


@product_router.post("")
def create_product(
    body: CreateProductRequest,
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    command = CreateProduct(**body.model_dump(), created_by=actor.id)
    product = CreateProductHandler(products, categories).create_product(command)
    return respond({"product": product}, "Product created successfully", status_code=201)


@product_router.put("/{product_id}")
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    command = UpdateProductDetails(product_id=product_id, updated_by=actor.id, **body.model_dump(exclude_unset=True))
    product = ProductDetailsHandler(products, categories).update_product_details(command)
    return respond({"product": product}, "Product updated successfully")


@product_router.put("/{product_id}/activate")
def activate_product(
    product_id: str,
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
):
    product = ManageLifecycleHandler(products).activate_product(
        ActivateProduct(product_id=product_id, updated_by=actor.id)
    )
    return respond({"product": product}, "Product activated successfully")


@product_router.put("/{product_id}/deactivate")
def deactivate_product(
    product_id: str,
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
):
    product = ManageLifecycleHandler(products).deactivate_product(
        DeactivateProduct(product_id=product_id, updated_by=actor.id)
    )
    return respond({"product": product}, "Product deactivated successfully")


# --- Category endpoints ---


@category_router.get("")
def list_categories(
    categories: CategoryRepository = Depends(get_categories),
    products: ProductRepository = Depends(get_products),
):
    return respond({"categories": ManageCategoryHandler(categories, products).list_categories()})


@category_router.post("")
def create_category(
    body: CreateCategoryRequest,
    actor: Actor = Depends(admin_only),
    categories: CategoryRepository = Depends(get_categories),
    products: ProductRepository = Depends(get_products),
):
    command = CreateCategory(name=body.name, description=body.description, created_by=actor.id)
    category = ManageCategoryHandler(categories, products).create_category(command)
    return respond({"category": category}, "Category created successfully", status_code=201)


@category_router.put("/{category_id}")
def update_category(
    category_id: str,
    body: UpdateCategoryRequest,
    actor: Actor = Depends(admin_only),
    categories: CategoryRepository = Depends(get_categories),
    products: ProductRepository = Depends(get_products),
):
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        is_active=body.is_active,
    )
    category = ManageCategoryHandler(categories, products).update_category(command)
    return respond({"category": category}, "Category updated successfully")


@category_router.delete("/{category_id}")
def delete_category(
    category_id: str,
    actor: Actor = Depends(admin_only),
    categories: CategoryRepository = Depends(get_categories),
    products: ProductRepository = Depends(get_products),
):
    ManageCategoryHandler(categories, products).deactivate_category(DeactivateCategory(category_id=category_id))
    return respond(None, "Category deleted successfully")


# --- Bulk endpoints ---


@bulk_router.get("/template")
def download_template(actor: Actor = Depends(admin_only)):
    return _csv_response(template_csv(), TEMPLATE_FILENAME)


@bulk_router.get("/export")
def export_products(
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    return _csv_response(ExportHandler(products, categories).export_products(), EXPORT_FILENAME)


@bulk_router.post("/products")
def upload_products(
    file: UploadFile | None = File(None),
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
    categories: CategoryRepository = Depends(get_categories),
):
    if file is None:
        raise ValidationError({"file": ["No CSV file provided"]})

    filename = (file.filename or "").lower()
    if not (filename.endswith(".csv") or file.content_type in ("text/csv", "application/vnd.ms-excel")):
        raise ValidationError({"file": ["Only CSV files are allowed"]})

    try:
        content = file.file.read().decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError({"file": ["CSV file is empty or invalid"]}) from None

    result = BulkUploadHandler(products, categories).upload_products(
        BulkUploadProducts(content=content, uploaded_by=actor.id)
    )
    message = f"Bulk upload completed. {result.successful} products created, {result.failed} failed."
    return respond(result, message)


@bulk_router.put("/products")
def bulk_update_products(
    body: BulkUpdateRequest,
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
):
    if not body.updates:
        raise ValidationError({"updates": ["Updates array is required"]})

    result = BulkMaintenanceHandler(products).update_products(
        BulkUpdateProducts(updates=body.updates, updated_by=actor.id)
    )
    message = f"Bulk update completed. {result.successful} products updated, {result.failed} failed."
    return respond(result, message)


@bulk_router.delete("/products")
def bulk_delete_products(
    body: BulkDeleteRequest,
    actor: Actor = Depends(admin_only),
    products: ProductRepository = Depends(get_products),
):
    if not body.product_ids:
        raise ValidationError({"product_ids": ["Product IDs array is required"]})

    deleted = BulkMaintenanceHandler(products).delete_products(
        BulkDeleteProducts(product_ids=body.product_ids, updated_by=actor.id)
    )
    return respond({"deleted_count": deleted}, f"{deleted} products deleted successfully")
