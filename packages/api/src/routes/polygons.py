# This project was developed with assistance from AI tools.
"""Polygon CRUD routes with tenant-scope enforcement.

Every endpoint resolves the caller's AccessScope once and hands it to the
service layer. A polygon outside the scope is a 404, never a 403.
"""

import uuid

from db import Polygon, get_db
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..middleware.auth import CurrentScope
from ..schemas import Pagination
from ..schemas.polygon import (
    PointResponse,
    PolygonCreate,
    PolygonIdResponse,
    PolygonListResponse,
    PolygonName,
    PolygonResponse,
    PolygonUpdate,
)
from ..services import polygon as polygon_service

router = APIRouter()


def _build_polygon_response(polygon: Polygon) -> PolygonResponse:
    points = sorted(polygon.points or [], key=lambda p: p.order)
    return PolygonResponse(
        id=polygon.polygon_id,
        name=polygon.polygon_name,
        created_by_user_id=polygon.created_by_user_id,
        created_date=polygon.created_date,
        points=[PointResponse.model_validate(p) for p in points],
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Polygon not found")


@router.get("/", response_model=PolygonListResponse)
async def list_polygons(
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PolygonListResponse:
    """List the caller's polygons plus those of its tenant group."""
    polygons, total = await polygon_service.list_polygons(
        session, scope, offset=offset, limit=limit,
    )
    return PolygonListResponse(
        data=[_build_polygon_response(p) for p in polygons],
        pagination=Pagination.for_page(total, offset, limit),
    )


@router.get("/names", response_model=list[PolygonName])
async def list_polygon_names(
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> list[PolygonName]:
    names = await polygon_service.list_polygon_names(session, scope)
    return [PolygonName(id=pid, name=name) for pid, name in names]


@router.get("/id-by-name", response_model=PolygonIdResponse)
async def get_polygon_id_by_name(
    scope: CurrentScope,
    polygon_name: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_db),
) -> PolygonIdResponse:
    polygon = await polygon_service.get_polygon_by_name(session, scope, polygon_name)
    if polygon is None:
        raise _not_found()
    return PolygonIdResponse(id=polygon.polygon_id)


@router.get("/{polygon_id}", response_model=PolygonResponse)
async def get_polygon(
    polygon_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> PolygonResponse:
    """Get a single polygon. Returns 404 for out-of-scope polygons."""
    polygon = await polygon_service.get_polygon(session, scope, polygon_id)
    if polygon is None:
        raise _not_found()
    return _build_polygon_response(polygon)


@router.post("/", response_model=PolygonResponse, status_code=status.HTTP_201_CREATED)
async def create_polygon(
    body: PolygonCreate,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> PolygonResponse:
    """Create a polygon owned by the caller."""
    polygon = await polygon_service.create_polygon(session, scope, body.name, body.points)
    return _build_polygon_response(polygon)


@router.put("/{polygon_id}", response_model=PolygonResponse)
async def update_polygon(
    polygon_id: uuid.UUID,
    body: PolygonUpdate,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> PolygonResponse:
    """Rename a polygon and replace all of its points."""
    polygon = await polygon_service.update_polygon(
        session, scope, polygon_id, body.name, body.points,
    )
    if polygon is None:
        raise _not_found()
    return _build_polygon_response(polygon)


@router.delete("/by-name/{polygon_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_polygon_by_name(
    polygon_name: str,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not await polygon_service.delete_polygon_by_name(session, scope, polygon_name):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{polygon_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_polygon(
    polygon_id: uuid.UUID,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> Response:
    if not await polygon_service.delete_polygon(session, scope, polygon_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
