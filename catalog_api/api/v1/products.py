from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from catalog_api.api.params import ProductId
from catalog_api.core.auth import require_read, require_write
from catalog_api.core.config import settings
from catalog_api.core.deps import get_product_service
from catalog_api.schemas import MAX_INT, ApiResponse, Page, ProductCreate, ProductRead, ProductUpdate
from catalog_api.services import ProductService

router = APIRouter(prefix="/products", tags=["Product"])


@router.get(
    "",
    response_model=ApiResponse[Page[ProductRead]],
    dependencies=[Depends(require_read)],
)
def http_list_products(
    name: Optional[str] = Query(default=None, description="Case-insensitive name search"),
    category_id: Optional[int] = Query(default=None, alias="categoryId", ge=1, le=MAX_INT),
    page: int = Query(default=0, ge=0, le=MAX_INT, description="Page number (0-based)"),
    page_size: int = Query(
        default=settings.default_page_size,
        alias="pageSize",
        ge=1,
        le=settings.max_page_size,
    ),
    service: ProductService = Depends(get_product_service),
):
    return ApiResponse(data=service.list_products(name, category_id, page, page_size))


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    dependencies=[Depends(require_read)],
)
def http_get_product(product_id: ProductId, service: ProductService = Depends(get_product_service)):
    return ApiResponse(data=service.get_product(product_id))


@router.post(
    "",
    response_model=ApiResponse[ProductRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_write)],
)
def http_create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    return ApiResponse(message="Product created successfully", data=service.create_product(payload))


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductRead],
    dependencies=[Depends(require_write)],
)
def http_update_product(
    product_id: ProductId,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    return ApiResponse(
        message="Product updated successfully",
        data=service.update_product(product_id, payload),
    )


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_write)],
)
def http_delete_product(product_id: ProductId, service: ProductService = Depends(get_product_service)):
    # SKUs go with the product.
    service.delete_product(product_id)
    return ApiResponse(message="Product deleted successfully")
