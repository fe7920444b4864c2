"""
Service layer for food records.

``FoodService`` implements the record lifecycle on top of a
``StableMap``: identifier assignment on create, existence checks on
read/update/delete, full-document merge on update and timestamp
stamping.  The map and the clock are handed in by the caller; the
application creates one service at start-up and keeps it for the
lifetime of the process.

Lookups that find nothing return ``None``.  Translating that into an
HTTP response is the job of the API layer.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from food_api.app.core.clock import current_time
from food_api.app.core.stable_map import StableMap
from food_api.app.schemas.food import SYSTEM_FIELDS, Food, FoodCreate, FoodUpdate

logger = logging.getLogger(__name__)


def _caller_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if key not in SYSTEM_FIELDS}


class FoodService:
    """CRUD operations for food records."""

    def __init__(
        self,
        storage: StableMap[Food],
        clock: Callable[[], datetime] = current_time,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.storage = storage
        self.clock = clock
        self.id_factory = id_factory

    def create_food(self, data: FoodCreate) -> Food:
        """Store a new food and return it.

        The identifier and ``createdAt`` are assigned here and win over
        anything the caller sent; ``updatedAt`` starts out empty.
        """
        food_id = self._new_id()
        document: Dict[str, Any] = {"updatedAt": None}
        document.update(_caller_fields(data.model_dump()))
        document.update(id=food_id, createdAt=self.clock(), updatedAt=None)
        food = Food.model_validate(document)
        self.storage.insert(food.id, food)
        logger.info("Created food %s", food.id)
        return food

    def list_foods(self) -> List[Food]:
        return self.storage.values()

    def get_food(self, food_id: str) -> Optional[Food]:
        return self.storage.get(food_id)

    def update_food(self, food_id: str, data: FoodUpdate) -> Optional[Food]:
        """Overlay the provided fields onto an existing food.

        Returns the merged record, or ``None`` if no food has
        ``food_id``, in which case nothing is written.  ``null`` for
        ``name``, ``type`` or ``price`` leaves the stored value alone;
        any other field sent as ``null`` is stored as ``null``.
        """
        current = self.storage.get(food_id)
        if current is None:
            return None
        document = current.model_dump(by_alias=True)
        supplied = data.model_dump(exclude_unset=True)
        document.update(
            (key, value)
            for key, value in _caller_fields(supplied).items()
            if value is not None or key not in FoodUpdate.model_fields
        )
        document.update(
            id=current.id,
            createdAt=current.created_at,
            updatedAt=max(self.clock(), current.created_at),
        )
        food = Food.model_validate(document)
        self.storage.insert(food.id, food)
        logger.info("Updated food %s", food.id)
        return food

    def delete_food(self, food_id: str) -> Optional[Food]:
        """Delete a food and return it, or ``None`` if it did not exist."""
        deleted = self.storage.remove(food_id)
        if deleted is not None:
            logger.info("Deleted food %s", food_id)
        return deleted

    def _new_id(self) -> str:
        food_id = self.id_factory()
        while self.storage.contains_key(food_id):
            food_id = self.id_factory()
        return food_id
