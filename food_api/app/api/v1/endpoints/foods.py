"""
Food endpoints for API v1.

These routes expose the CRUD API for food records.  Successful calls
answer 200 with the record (or list of records) as JSON.  A missing
identifier is answered with a plain-text message: 404 when reading,
400 when updating or deleting.
"""

from typing import List, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from food_api.app.schemas.food import Food, FoodCreate, FoodUpdate
from food_api.app.services.food_service import FoodService

router = APIRouter()


def get_food_service(request: Request) -> FoodService:
    """Return the service created at application start-up."""
    return request.app.state.food_service


@router.post("", response_model=Food)
async def create_food(
    food_in: FoodCreate,
    service: FoodService = Depends(get_food_service),
) -> Food:
    """Create a new food with a generated ``id`` and ``createdAt``."""
    return service.create_food(food_in)


@router.get("", response_model=List[Food])
async def list_foods(service: FoodService = Depends(get_food_service)) -> List[Food]:
    """Return every stored food."""
    return service.list_foods()


@router.get("/{food_id}", response_model=Food, responses={404: {"content": {"text/plain": {}}}})
async def get_food(
    food_id: str,
    service: FoodService = Depends(get_food_service),
) -> Union[Food, PlainTextResponse]:
    food = service.get_food(food_id)
    if food is None:
        return PlainTextResponse(
            f"the food with id={food_id} not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return food


@router.put("/{food_id}", response_model=Food, responses={400: {"content": {"text/plain": {}}}})
async def update_food(
    food_id: str,
    food_in: FoodUpdate,
    service: FoodService = Depends(get_food_service),
) -> Union[Food, PlainTextResponse]:
    """Overlay the supplied fields onto an existing food."""
    food = service.update_food(food_id, food_in)
    if food is None:
        return PlainTextResponse(
            f"couldn't update a food with id={food_id}. food not found",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return food


@router.delete("/{food_id}", response_model=Food, responses={400: {"content": {"text/plain": {}}}})
async def delete_food(
    food_id: str,
    service: FoodService = Depends(get_food_service),
) -> Union[Food, PlainTextResponse]:
    """Delete a food and echo the removed record."""
    food = service.delete_food(food_id)
    if food is None:
        return PlainTextResponse(
            f"couldn't delete a food with id={food_id}. food not found",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return food
