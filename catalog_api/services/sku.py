from __future__ import annotations

from sqlalchemy.orm import Session

from catalog_api import repositories as repo
from catalog_api.core.errors import DuplicateResourceError, ResourceNotFoundError
from catalog_api.core.logging import get_logger
from catalog_api.mappers import sku_to_read
from catalog_api.models import Sku
from catalog_api.schemas import SkuCreate, SkuRead, SkuUpdate
from catalog_api.services.base import BaseService, supplied_fields
from catalog_api.services.product import ProductService

logger = get_logger(__name__)


class SkuService(BaseService):
    """
    SKU rules.

    Every operation first resolves the owning product through ``ProductService``
    (its not-found error propagates), then looks the SKU up constrained to that
    product. SKU codes are unique across the whole catalog, not per product.
    """

    def __init__(self, db: Session, products: ProductService) -> None:
        super().__init__(db)
        self.products = products

    def list_skus(self, product_id: int) -> list[SkuRead]:
        logger.info("Fetching all SKUs for product id: %s", product_id)
        self.products.resolve_or_fail(product_id)
        return [sku_to_read(s) for s in repo.list_skus_for_product(self.db, product_id)]

    def get_sku(self, product_id: int, sku_id: int) -> SkuRead:
        logger.info("Fetching SKU with id: %s for product id: %s", sku_id, product_id)
        self.products.resolve_or_fail(product_id)
        return sku_to_read(self._resolve_for_product(sku_id, product_id))

    def create_sku(self, product_id: int, payload: SkuCreate) -> SkuRead:
        logger.info("Creating new SKU with code: %s for product id: %s", payload.sku_code, product_id)

        product = self.products.resolve_or_fail(product_id)

        if repo.sku_code_exists(self.db, payload.sku_code):
            raise DuplicateResourceError("SKU", "skuCode", payload.sku_code)

        sku = repo.save(
            self.db,
            Sku(
                sku_code=payload.sku_code,
                name=payload.name,
                attributes=payload.attributes,
                price=payload.price,
                quantity=payload.quantity,
                product_id=product.id,
            ),
        )
        self.commit(lambda: DuplicateResourceError("SKU", "skuCode", payload.sku_code))

        logger.info("SKU created successfully with id: %s", sku.id)
        return sku_to_read(sku)

    def update_sku(self, product_id: int, sku_id: int, payload: SkuUpdate) -> SkuRead:
        logger.info("Updating SKU with id: %s for product id: %s", sku_id, product_id)

        self.products.resolve_or_fail(product_id)
        sku = self._resolve_for_product(sku_id, product_id)
        changes = supplied_fields(payload)

        new_code = changes.get("sku_code")
        if new_code is not None and new_code != sku.sku_code:
            if repo.sku_code_exists(self.db, new_code, exclude_id=sku_id):
                raise DuplicateResourceError("SKU", "skuCode", new_code)

        for field, value in changes.items():
            setattr(sku, field, value)
        self.commit(lambda: DuplicateResourceError("SKU", "skuCode", new_code))

        logger.info("SKU updated successfully with id: %s", sku_id)
        return sku_to_read(sku)

    def delete_sku(self, product_id: int, sku_id: int) -> None:
        logger.info("Deleting SKU with id: %s for product id: %s", sku_id, product_id)

        self.products.resolve_or_fail(product_id)
        sku = self._resolve_for_product(sku_id, product_id)
        repo.delete(self.db, sku)
        self.commit()

        logger.info("SKU deleted successfully with id: %s", sku_id)

    def _resolve_for_product(self, sku_id: int, product_id: int) -> Sku:
        sku = repo.get_sku_for_product(self.db, sku_id, product_id)
        if sku is None:
            raise ResourceNotFoundError(
                "SKU", "id", sku_id, message=f"SKU not found with id: {sku_id} for product id: {product_id}"
            )
        return sku
