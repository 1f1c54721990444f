from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from catalog_api import repositories as repo
from catalog_api.core.errors import DuplicateResourceError, ResourceNotFoundError
from catalog_api.core.logging import get_logger
from catalog_api.mappers import product_to_read
from catalog_api.models import Product
from catalog_api.schemas import Page, ProductCreate, ProductRead, ProductUpdate
from catalog_api.services.base import BaseService, supplied_fields
from catalog_api.services.category import CategoryService

logger = get_logger(__name__)


class ProductService(BaseService):
    """
    Product rules.

    A product name is unique within its category; the same name may live in
    several categories. Category references are resolved through
    ``CategoryService``, whose not-found error propagates untouched. Deleting
    a product removes its SKUs.
    """

    def __init__(self, db: Session, categories: CategoryService) -> None:
        super().__init__(db)
        self.categories = categories

    def list_products(
        self,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        page: int = 0,
        page_size: int = 10,
    ) -> Page[ProductRead]:
        logger.info(
            "Fetching products with filters - name: %s, categoryId: %s, page: %s, pageSize: %s",
            name,
            category_id,
            page,
            page_size,
        )
        products, total = repo.find_products(
            self.db,
            name=name,
            category_id=category_id,
            offset=page * page_size,
            limit=page_size,
        )
        counts = repo.count_skus_by_product(self.db, [p.id for p in products])
        content = [product_to_read(p, counts.get(p.id, 0)) for p in products]
        return Page[ProductRead].build(content, page=page, page_size=page_size, total_elements=total)

    def get_product(self, product_id: int) -> ProductRead:
        logger.info("Fetching product with id: %s", product_id)
        product = self.resolve_or_fail(product_id)
        return self._to_read(product)

    def create_product(self, payload: ProductCreate) -> ProductRead:
        logger.info("Creating new product with name: %s", payload.name)

        category = self.categories.resolve_or_fail(payload.category_id)

        if repo.product_name_exists_in_category(self.db, payload.name, category.id):
            raise self._duplicate(payload.name, category.name)

        product = repo.save(
            self.db,
            Product(
                name=payload.name,
                description=payload.description,
                base_price=payload.base_price,
                brand=payload.brand,
                category=category,
            ),
        )
        category_name = category.name
        self.commit(lambda: self._duplicate(payload.name, category_name))

        logger.info("Product created successfully with id: %s", product.id)
        return product_to_read(product, 0)

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductRead:
        logger.info("Updating product with id: %s", product_id)

        product = self.resolve_or_fail(product_id)
        changes = supplied_fields(payload)

        # Every check runs before the row is touched; a refused update leaves nothing pending.
        new_category_id = changes.pop("category_id", None)
        category = product.category
        if new_category_id is not None:
            category = self.categories.resolve_or_fail(new_category_id)

        new_name = changes.get("name", product.name)
        if new_name != product.name or category.id != product.category_id:
            if repo.product_name_exists_in_category(self.db, new_name, category.id, exclude_id=product_id):
                raise self._duplicate(new_name, category.name)

        product.category = category
        for field, value in changes.items():
            setattr(product, field, value)
        final_name, category_name = product.name, category.name
        self.commit(lambda: self._duplicate(final_name, category_name))

        logger.info("Product updated successfully with id: %s", product_id)
        return self._to_read(product)

    def delete_product(self, product_id: int) -> None:
        logger.info("Deleting product with id: %s", product_id)

        product = self.resolve_or_fail(product_id)
        repo.delete(self.db, product)
        self.commit()

        logger.info("Product deleted successfully with id: %s", product_id)

    def resolve_or_fail(self, product_id: int) -> Product:
        product = repo.get_product(self.db, product_id)
        if product is None:
            raise ResourceNotFoundError("Product", "id", product_id)
        return product

    def _to_read(self, product: Product) -> ProductRead:
        return product_to_read(product, repo.count_skus_for_product(self.db, product.id))

    @staticmethod
    def _duplicate(name: str, category_name: str) -> DuplicateResourceError:
        return DuplicateResourceError(
            "Product",
            "name",
            name,
            message=f"Product with name '{name}' already exists in category '{category_name}'",
        )
