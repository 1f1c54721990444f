from catalog_api.services.category import CategoryService
from catalog_api.services.product import ProductService
from catalog_api.services.sku import SkuService

__all__ = ["CategoryService", "ProductService", "SkuService"]
