# This project was developed with assistance from AI tools.
"""Grain and animal parcel data schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class GrainParcelCreate(BaseModel):
    polygon_id: uuid.UUID
    crop_type: str = Field(min_length=1, max_length=100)
    parcel_area: Decimal | None = None
    irrigation_type: str | None = None
    fertilizer_used: Decimal | None = None
    pesticide_used: Decimal | None = None
    yield_amount: Decimal | None = None
    soil_type: str | None = None
    season: str | None = None
    water_usage: Decimal | None = None


class GrainParcelResponse(GrainParcelCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_date: datetime


class AnimalParcelCreate(BaseModel):
    polygon_id: uuid.UUID
    animal_type: str = Field(min_length=1, max_length=100)
    number_of_animals: int = Field(default=0, ge=0)
    feed_type: str = ""
    water_consumption: Decimal = Decimal("0")
    veterinary_visits: int = Field(default=0, ge=0)
    waste_management: str = ""


class AnimalParcelResponse(AnimalParcelCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_date: datetime


class ParcelDeleteResponse(BaseModel):
    message: str
    deleted: int
