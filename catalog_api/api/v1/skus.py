from fastapi import APIRouter, Depends, status

from catalog_api.api.params import ProductId, SkuId
from catalog_api.core.auth import require_read, require_write
from catalog_api.core.deps import get_sku_service
from catalog_api.schemas import ApiResponse, SkuCreate, SkuRead, SkuUpdate
from catalog_api.services import SkuService

router = APIRouter(prefix="/products/{product_id}/skus", tags=["SKU"])


@router.get(
    "",
    response_model=ApiResponse[list[SkuRead]],
    dependencies=[Depends(require_read)],
)
def http_list_skus(product_id: ProductId, service: SkuService = Depends(get_sku_service)):
    return ApiResponse(data=service.list_skus(product_id))


@router.get(
    "/{sku_id}",
    response_model=ApiResponse[SkuRead],
    dependencies=[Depends(require_read)],
)
def http_get_sku(product_id: ProductId, sku_id: SkuId, service: SkuService = Depends(get_sku_service)):
    return ApiResponse(data=service.get_sku(product_id, sku_id))


@router.post(
    "",
    response_model=ApiResponse[SkuRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_write)],
)
def http_create_sku(product_id: ProductId, payload: SkuCreate, service: SkuService = Depends(get_sku_service)):
    return ApiResponse(message="SKU created successfully", data=service.create_sku(product_id, payload))


@router.put(
    "/{sku_id}",
    response_model=ApiResponse[SkuRead],
    dependencies=[Depends(require_write)],
)
def http_update_sku(
    product_id: ProductId,
    sku_id: SkuId,
    payload: SkuUpdate,
    service: SkuService = Depends(get_sku_service),
):
    return ApiResponse(
        message="SKU updated successfully",
        data=service.update_sku(product_id, sku_id, payload),
    )


@router.delete(
    "/{sku_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_write)],
)
def http_delete_sku(product_id: ProductId, sku_id: SkuId, service: SkuService = Depends(get_sku_service)):
    service.delete_sku(product_id, sku_id)
    return ApiResponse(message="SKU deleted successfully")
