# This project was developed with assistance from AI tools.
"""Polygon entry request/response schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PolygonEntryCreate(BaseModel):
    """Record an entry. ``polygon_id`` is optional; when set it must be visible."""

    polygon_id: uuid.UUID | None = None
    category: str = Field(min_length=1, max_length=100)
    value: Decimal


class PolygonEntryResponse(BaseModel):
    id: uuid.UUID
    polygon_id: uuid.UUID | None = None
    created_by_user_id: uuid.UUID
    category: str
    value: Decimal
    created_date: datetime


class PolygonEntryListResponse(BaseModel):
    data: list[PolygonEntryResponse]
    count: int
