# This project was developed with assistance from AI tools.
"""Grain and animal parcel data service.

Parcel rows carry no owner of their own; they are visible exactly when their
polygon is, so every query joins to Polygon through apply_owner_scope.
"""

import logging
import uuid

from db import AnimalParcelData, GrainParcelData, Polygon
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import AccessScope
from .polygon import get_polygon
from .scope import apply_owner_scope

logger = logging.getLogger(__name__)

ParcelModel = type[GrainParcelData] | type[AnimalParcelData]


def _parcel_query(model: ParcelModel, scope: AccessScope):
    return apply_owner_scope(
        select(model), Polygon.created_by_user_id, scope, join_to_polygon=model.polygon,
    )


async def list_parcels(
    session: AsyncSession,
    scope: AccessScope,
    model: ParcelModel,
    *,
    polygon_id: uuid.UUID | None = None,
) -> list:
    stmt = _parcel_query(model, scope).order_by(model.created_date.desc())
    if polygon_id is not None:
        stmt = stmt.where(model.polygon_id == polygon_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_parcel(
    session: AsyncSession,
    scope: AccessScope,
    model: ParcelModel,
    parcel_id: uuid.UUID,
):
    stmt = _parcel_query(model, scope).where(model.id == parcel_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_grain_parcel(
    session: AsyncSession,
    scope: AccessScope,
    data: dict,
) -> GrainParcelData | None:
    """Add grain data to a visible polygon. None if the polygon is out of scope."""
    if await get_polygon(session, scope, data["polygon_id"]) is None:
        return None

    parcel = GrainParcelData(id=uuid.uuid4(), **data)
    session.add(parcel)
    parcel_id = parcel.id
    await session.commit()
    return await get_parcel(session, scope, GrainParcelData, parcel_id)


async def replace_animal_parcel(
    session: AsyncSession,
    scope: AccessScope,
    data: dict,
) -> AnimalParcelData | None:
    """Store animal data for a visible polygon, replacing any previous rows.

    None if the polygon is out of scope.
    """
    polygon_id = data["polygon_id"]
    if await get_polygon(session, scope, polygon_id) is None:
        return None

    for existing in await list_parcels(session, scope, AnimalParcelData, polygon_id=polygon_id):
        await session.delete(existing)

    parcel = AnimalParcelData(id=uuid.uuid4(), **data)
    session.add(parcel)
    parcel_id = parcel.id
    await session.commit()
    return await get_parcel(session, scope, AnimalParcelData, parcel_id)


async def delete_parcel(
    session: AsyncSession,
    scope: AccessScope,
    model: ParcelModel,
    parcel_id: uuid.UUID,
) -> bool:
    parcel = await get_parcel(session, scope, model, parcel_id)
    if parcel is None:
        return False
    await session.delete(parcel)
    await session.commit()
    return True


async def delete_parcels_for_polygon(
    session: AsyncSession,
    scope: AccessScope,
    model: ParcelModel,
    polygon_id: uuid.UUID,
) -> int:
    """Delete every visible parcel row of ``model`` for a polygon. Returns the count."""
    parcels = await list_parcels(session, scope, model, polygon_id=polygon_id)
    for parcel in parcels:
        await session.delete(parcel)
    if parcels:
        await session.commit()
        logger.info(
            "Deleted %d %s row(s) for polygon %s", len(parcels), model.__tablename__, polygon_id,
        )
    return len(parcels)
