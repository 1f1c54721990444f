from __future__ import annotations

from catalog_api import repositories as repo
from catalog_api.core.errors import DuplicateResourceError, InvalidOperationError, ResourceNotFoundError
from catalog_api.core.logging import get_logger
from catalog_api.mappers import category_to_read
from catalog_api.models import Category
from catalog_api.schemas import CategoryCreate, CategoryRead, CategoryUpdate
from catalog_api.services.base import BaseService, supplied_fields

logger = get_logger(__name__)


class CategoryService(BaseService):
    """Category rules: names are unique, and a category with products cannot be deleted."""

    def list_categories(self) -> list[CategoryRead]:
        logger.info("Fetching all categories")
        counts = repo.count_products_by_category(self.db)
        return [category_to_read(c, counts.get(c.id, 0)) for c in repo.list_categories(self.db)]

    def get_category(self, category_id: int) -> CategoryRead:
        logger.info("Fetching category with id: %s", category_id)
        category = self.resolve_or_fail(category_id)
        return self._to_read(category)

    def create_category(self, payload: CategoryCreate) -> CategoryRead:
        logger.info("Creating new category with name: %s", payload.name)

        if repo.category_name_exists(self.db, payload.name):
            raise DuplicateResourceError("Category", "name", payload.name)

        category = repo.save(self.db, Category(name=payload.name, description=payload.description))
        self.commit(lambda: DuplicateResourceError("Category", "name", payload.name))

        logger.info("Category created successfully with id: %s", category.id)
        return category_to_read(category, 0)

    def update_category(self, category_id: int, payload: CategoryUpdate) -> CategoryRead:
        logger.info("Updating category with id: %s", category_id)

        category = self.resolve_or_fail(category_id)
        changes = supplied_fields(payload)

        new_name = changes.get("name")
        if new_name is not None and new_name != category.name:
            if repo.category_name_exists(self.db, new_name, exclude_id=category_id):
                raise DuplicateResourceError("Category", "name", new_name)

        for field, value in changes.items():
            setattr(category, field, value)
        self.commit(lambda: DuplicateResourceError("Category", "name", new_name))

        logger.info("Category updated successfully with id: %s", category_id)
        return self._to_read(category)

    def delete_category(self, category_id: int) -> None:
        logger.info("Deleting category with id: %s", category_id)

        category = self.resolve_or_fail(category_id)
        product_count = repo.count_products_in_category(self.db, category_id)
        if product_count > 0:
            raise InvalidOperationError(
                f"Cannot delete category '{category.name}' as it has {product_count} associated products"
            )

        category_name = category.name
        repo.delete(self.db, category)
        self.commit(
            lambda: InvalidOperationError(f"Cannot delete category '{category_name}' as it has associated products")
        )
        logger.info("Category deleted successfully with id: %s", category_id)

    def resolve_or_fail(self, category_id: int) -> Category:
        category = repo.get_category(self.db, category_id)
        if category is None:
            raise ResourceNotFoundError("Category", "id", category_id)
        return category

    def _to_read(self, category: Category) -> CategoryRead:
        return category_to_read(category, repo.count_products_in_category(self.db, category.id))
