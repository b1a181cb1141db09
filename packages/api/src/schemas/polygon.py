# This project was developed with assistance from AI tools.
"""Polygon request/response schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class PointRequest(BaseModel):
    latitude: Decimal = Field(ge=-90, le=90)
    longitude: Decimal = Field(ge=-180, le=180)
    order: int = 0


class PolygonCreate(BaseModel):
    """Create a polygon. Point order is taken from list position."""

    name: str = Field(min_length=1, max_length=200)
    points: list[PointRequest] = []


class PolygonUpdate(BaseModel):
    """Rename a polygon and replace all of its points.

    Unlike creation, each point's ``order`` is taken from the request.
    """

    name: str = Field(min_length=1, max_length=200)
    points: list[PointRequest] = []


class PointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    point_id: uuid.UUID
    latitude: Decimal
    longitude: Decimal
    order: int


class PolygonResponse(BaseModel):
    """Single polygon with its points sorted by order."""

    id: uuid.UUID
    name: str
    created_by_user_id: uuid.UUID
    created_date: datetime
    points: list[PointResponse] = []


class PolygonListResponse(BaseModel):
    """Paginated list of polygons."""

    data: list[PolygonResponse]
    pagination: Pagination


class PolygonName(BaseModel):
    id: uuid.UUID
    name: str


class PolygonIdResponse(BaseModel):
    id: uuid.UUID
