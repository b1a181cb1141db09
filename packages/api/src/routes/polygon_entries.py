# This project was developed with assistance from AI tools.
"""Polygon entry routes. Visibility follows the entry's creator."""

import uuid

from db import PolygonEntry, get_db
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentScope
from ..schemas.polygon_entry import (
    PolygonEntryCreate,
    PolygonEntryListResponse,
    PolygonEntryResponse,
)
from ..services import polygon_entry as entry_service

router = APIRouter()


def _build_entry_response(entry: PolygonEntry) -> PolygonEntryResponse:
    return PolygonEntryResponse(
        id=entry.polygon_entry_id,
        polygon_id=entry.polygon_id,
        created_by_user_id=entry.created_by_user_id,
        category=entry.category,
        value=entry.value,
        created_date=entry.created_date,
    )


@router.get("/", response_model=PolygonEntryListResponse)
async def list_entries(
    scope: CurrentScope,
    polygon_id: uuid.UUID | None = None,
    session: AsyncSession = Depends(get_db),
) -> PolygonEntryListResponse:
    entries = await entry_service.list_entries(session, scope, polygon_id=polygon_id)
    return PolygonEntryListResponse(
        data=[_build_entry_response(e) for e in entries],
        count=len(entries),
    )


@router.get("/{entry_id}", response_model=PolygonEntryResponse)
async def get_entry(
    entry_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> PolygonEntryResponse:
    entry = await entry_service.get_entry(session, scope, entry_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    return _build_entry_response(entry)


@router.post("/", response_model=PolygonEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: PolygonEntryCreate,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> PolygonEntryResponse:
    entry = await entry_service.create_entry(
        session,
        scope,
        category=body.category,
        value=body.value,
        polygon_id=body.polygon_id,
    )
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Polygon not found")
    return _build_entry_response(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not await entry_service.delete_entry(session, scope, entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
