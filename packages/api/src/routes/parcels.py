# This project was developed with assistance from AI tools.
"""Grain and animal parcel data routes.

Parcel rows inherit visibility from their polygon. Creating data for a
polygon outside the caller's scope is a 404, the same as reading it.
"""

import uuid

from db import AnimalParcelData, GrainParcelData, get_db
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentScope
from ..schemas.parcel import (
    AnimalParcelCreate,
    AnimalParcelResponse,
    GrainParcelCreate,
    GrainParcelResponse,
    ParcelDeleteResponse,
)
from ..services import parcel as parcel_service

grain_router = APIRouter()
animal_router = APIRouter()


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


# ---------------------------------------------------------------------------
# Grain parcel data
# ---------------------------------------------------------------------------


@grain_router.get("/", response_model=list[GrainParcelResponse])
async def list_grain_parcels(
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> list[GrainParcelResponse]:
    parcels = await parcel_service.list_parcels(session, scope, GrainParcelData)
    return [GrainParcelResponse.model_validate(p) for p in parcels]


@grain_router.get("/polygon/{polygon_id}", response_model=list[GrainParcelResponse])
async def list_grain_parcels_for_polygon(
    polygon_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> list[GrainParcelResponse]:
    parcels = await parcel_service.list_parcels(
        session, scope, GrainParcelData, polygon_id=polygon_id,
    )
    if not parcels:
        raise _not_found("No parcels found for the given polygon")
    return [GrainParcelResponse.model_validate(p) for p in parcels]


@grain_router.get("/{parcel_id}", response_model=GrainParcelResponse)
async def get_grain_parcel(
    parcel_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> GrainParcelResponse:
    parcel = await parcel_service.get_parcel(session, scope, GrainParcelData, parcel_id)
    if parcel is None:
        raise _not_found("Parcel data not found")
    return GrainParcelResponse.model_validate(parcel)


@grain_router.post("/", response_model=GrainParcelResponse, status_code=status.HTTP_201_CREATED)
async def create_grain_parcel(
    body: GrainParcelCreate,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> GrainParcelResponse:
    parcel = await parcel_service.create_grain_parcel(session, scope, body.model_dump())
    if parcel is None:
        raise _not_found("Polygon not found")
    return GrainParcelResponse.model_validate(parcel)


@grain_router.delete("/polygon/{polygon_id}", response_model=ParcelDeleteResponse)
async def delete_grain_parcels_for_polygon(
    polygon_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> ParcelDeleteResponse:
    deleted = await parcel_service.delete_parcels_for_polygon(
        session, scope, GrainParcelData, polygon_id,
    )
    if not deleted:
        raise _not_found("No parcels found for the given polygon")
    return ParcelDeleteResponse(message="Parcels successfully deleted", deleted=deleted)


@grain_router.delete("/{parcel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_grain_parcel(
    parcel_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not await parcel_service.delete_parcel(session, scope, GrainParcelData, parcel_id):
        raise _not_found("Parcel data not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Animal parcel data
# ---------------------------------------------------------------------------


@animal_router.get("/", response_model=list[AnimalParcelResponse])
async def list_animal_parcels(
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> list[AnimalParcelResponse]:
    parcels = await parcel_service.list_parcels(session, scope, AnimalParcelData)
    return [AnimalParcelResponse.model_validate(p) for p in parcels]


@animal_router.get("/polygon/{polygon_id}", response_model=list[AnimalParcelResponse])
async def list_animal_parcels_for_polygon(
    polygon_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> list[AnimalParcelResponse]:
    parcels = await parcel_service.list_parcels(
        session, scope, AnimalParcelData, polygon_id=polygon_id,
    )
    if not parcels:
        raise _not_found("No animal parcels found for the given polygon")
    return [AnimalParcelResponse.model_validate(p) for p in parcels]


@animal_router.get("/{parcel_id}", response_model=AnimalParcelResponse)
async def get_animal_parcel(
    parcel_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> AnimalParcelResponse:
    parcel = await parcel_service.get_parcel(session, scope, AnimalParcelData, parcel_id)
    if parcel is None:
        raise _not_found("Animal parcel data not found")
    return AnimalParcelResponse.model_validate(parcel)


@animal_router.post("/", response_model=AnimalParcelResponse, status_code=status.HTTP_201_CREATED)
async def create_or_replace_animal_parcel(
    body: AnimalParcelCreate,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> AnimalParcelResponse:
    """Store animal data for a polygon, replacing what was there."""
    parcel = await parcel_service.replace_animal_parcel(session, scope, body.model_dump())
    if parcel is None:
        raise _not_found("Polygon not found")
    return AnimalParcelResponse.model_validate(parcel)


@animal_router.delete("/polygon/{polygon_id}", response_model=ParcelDeleteResponse)
async def delete_animal_parcels_for_polygon(
    polygon_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> ParcelDeleteResponse:
    deleted = await parcel_service.delete_parcels_for_polygon(
        session, scope, AnimalParcelData, polygon_id,
    )
    if not deleted:
        raise _not_found("No animal parcels found for the given polygon")
    return ParcelDeleteResponse(message="Animal parcels successfully deleted", deleted=deleted)


@animal_router.delete("/{parcel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal_parcel(
    parcel_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not await parcel_service.delete_parcel(session, scope, AnimalParcelData, parcel_id):
        raise _not_found("Animal parcel data not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
