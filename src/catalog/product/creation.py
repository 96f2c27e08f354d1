"""Product creation — command and handler."""

import structlog
from pydantic import Field

from catalog.category.repository import CategoryRepository
from catalog.product.product import Dimensions, Product, ProductImage, Specification
from catalog.product.repository import ProductRepository
from shared.command import Command
from shared.exceptions import NotFound, ValidationError

logger = structlog.get_logger(__name__)


class CreateProduct(Command):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    discount: int = Field(default=0, ge=0, le=100)
    category_id: str
    brand: str = Field(default="", max_length=50)
    sku: str = Field(min_length=1, max_length=50)
    images: list[ProductImage] = Field(default_factory=list)
    specifications: list[Specification] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    dimensions: Dimensions | None = None
    warranty: str = Field(default="", max_length=100)
    is_featured: bool = False
    is_active: bool = True
    stock: int = Field(default=0, ge=0)
    created_by: str | None = None


class CreateProductHandler:
    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self.products = products
        self.categories = categories

    def create_product(self, command: CreateProduct) -> Product:
        category = self.categories.get_or_none(command.category_id)
        if category is None or not category.is_active:
            raise NotFound("Category not found")

        sku = command.sku.strip()
        if self.products.sku_exists(sku):
            raise ValidationError({"sku": [f'Product with SKU "{sku}" already exists']})

        fields = command.model_dump(exclude={"created_by", "sku"})
        product = Product.create(created_by=command.created_by, sku=sku, **fields)
        self.products.add(product)

        logger.info("Product created", product_id=product.id, sku=product.sku)
        return product
