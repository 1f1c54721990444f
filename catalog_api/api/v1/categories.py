from fastapi import APIRouter, Depends, status

from catalog_api.api.params import CategoryId
from catalog_api.core.auth import require_read, require_write
from catalog_api.core.deps import get_category_service
from catalog_api.schemas import ApiResponse, CategoryCreate, CategoryRead, CategoryUpdate
from catalog_api.services import CategoryService

router = APIRouter(prefix="/categories", tags=["Category"])


@router.get(
    "",
    response_model=ApiResponse[list[CategoryRead]],
    dependencies=[Depends(require_read)],
)
def http_list_categories(service: CategoryService = Depends(get_category_service)):
    return ApiResponse(data=service.list_categories())


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    dependencies=[Depends(require_read)],
)
def http_get_category(category_id: CategoryId, service: CategoryService = Depends(get_category_service)):
    return ApiResponse(data=service.get_category(category_id))


@router.post(
    "",
    response_model=ApiResponse[CategoryRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_write)],
)
def http_create_category(payload: CategoryCreate, service: CategoryService = Depends(get_category_service)):
    return ApiResponse(message="Category created successfully", data=service.create_category(payload))


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    dependencies=[Depends(require_write)],
)
def http_update_category(
    category_id: CategoryId,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    return ApiResponse(
        message="Category updated successfully",
        data=service.update_category(category_id, payload),
    )


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[None],
    dependencies=[Depends(require_write)],
)
def http_delete_category(category_id: CategoryId, service: CategoryService = Depends(get_category_service)):
    service.delete_category(category_id)
    return ApiResponse(message="Category deleted successfully")
