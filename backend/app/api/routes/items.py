from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_item_service
from app.core.errors import ItemError
from app.schemas.item import ErrorResponse, ItemCreate, ItemResponse
from app.services.item_service import ItemService


router = APIRouter(prefix="/items", tags=["items"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid category"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Item not found after insert"},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Item already exists"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Failed to add item"},
}


def _add_item(payload: ItemCreate, service: ItemService):
    try:
        return service.add(payload)
    except ItemError as e:
        return JSONResponse(status_code=e.status_code, content={"error": str(e)})


@router.post(
    "/",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_item(payload: ItemCreate, service: ItemService = Depends(get_item_service)):
    return _add_item(payload, service)


@router.post(
    "/staff",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_staff(payload: ItemCreate, service: ItemService = Depends(get_item_service)):
    return _add_item(payload, service)
