from fastapi import APIRouter

from catalog_api.api.v1 import categories, products, skus
from catalog_api.core.config import settings

router = APIRouter(prefix=settings.api_prefix)


@router.get("/ping")
def ping():
    return {"message": "pong", "service": settings.app_name, "env": settings.environment}


router.include_router(categories.router)
router.include_router(products.router)
router.include_router(skus.router)
