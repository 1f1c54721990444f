"""Mapping between stored rows and wire models.

Derived counts are passed in by the caller; they come from count queries,
never from loading the association collections.
"""

from catalog_api.models import Category, Product, Sku
from catalog_api.schemas import CategoryRead, ProductRead, SkuRead


def category_to_read(category: Category, product_count: int = 0) -> CategoryRead:
    return CategoryRead(
        id=category.id,
        name=category.name,
        description=category.description,
        product_count=product_count,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def product_to_read(product: Product, sku_count: int = 0) -> ProductRead:
    return ProductRead(
        id=product.id,
        name=product.name,
        description=product.description,
        base_price=product.base_price,
        brand=product.brand,
        category_id=product.category_id,
        category_name=product.category.name,
        sku_count=sku_count,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def sku_to_read(sku: Sku) -> SkuRead:
    return SkuRead(
        id=sku.id,
        sku_code=sku.sku_code,
        name=sku.name,
        attributes=sku.attributes,
        price=sku.price,
        quantity=sku.quantity,
        product_id=sku.product_id,
        product_name=sku.product.name,
        created_at=sku.created_at,
        updated_at=sku.updated_at,
    )
