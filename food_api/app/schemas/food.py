"""
Pydantic schemas for food records.

A food has three caller-owned string attributes (``name``, ``type``
and ``price``) and three system-owned fields: the identifier and the
creation/update timestamps.  Request bodies are free-form JSON
objects, so every model here accepts additional fields and keeps them
on the record.  On the wire the timestamps use camelCase names
(``createdAt``, ``updatedAt``).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Keys a caller may never set, in both wire and attribute spelling.
SYSTEM_FIELDS = frozenset({"id", "createdAt", "updatedAt", "created_at", "updated_at"})


class FoodCreate(BaseModel):
    """Schema for creating a new food record."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Display name of the food")
    type: str = Field(..., description="Free-form category, e.g. ``grain``")
    price: str = Field(..., description="Price as an opaque string")


class FoodUpdate(BaseModel):
    """Schema for updating an existing food record.

    All fields are optional; only provided values are applied.
    """

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    type: Optional[str] = None
    price: Optional[str] = None


class Food(BaseModel):
    """A stored food record as returned by the API."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    name: str
    type: str
    price: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
