# This project was developed with assistance from AI tools.
"""Polygon service with owner-scope filtering.

Every query goes through apply_owner_scope so a requester sees its own
polygons plus those of its tenant group. Out-of-scope polygons are reported
as None (which the route maps to 404) rather than 403, to avoid leaking
existence.
"""

import logging
import uuid

from db import Polygon, PolygonPoint
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..schemas.auth import AccessScope
from ..schemas.polygon import PointRequest
from .scope import apply_owner_scope

logger = logging.getLogger(__name__)


def _scoped(stmt, scope: AccessScope):
    return apply_owner_scope(stmt, Polygon.created_by_user_id, scope)


def _polygon_query(scope: AccessScope):
    return _scoped(select(Polygon).options(selectinload(Polygon.points)), scope)


async def list_polygons(
    session: AsyncSession,
    scope: AccessScope,
    *,
    offset: int = 0,
    limit: int = 20,
) -> tuple[list[Polygon], int]:
    """Return polygons visible to the requester, newest first."""
    count_stmt = _scoped(select(func.count(Polygon.polygon_id)), scope)
    total = (await session.execute(count_stmt)).scalar() or 0

    stmt = (
        _polygon_query(scope)
        .order_by(Polygon.created_date.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.unique().scalars().all()), total


async def list_polygon_names(session: AsyncSession, scope: AccessScope) -> list[tuple[uuid.UUID, str]]:
    """Return (id, name) pairs for visible polygons, without points."""
    stmt = _scoped(
        select(Polygon.polygon_id, Polygon.polygon_name).order_by(Polygon.polygon_name),
        scope,
    )
    result = await session.execute(stmt)
    names = [(row[0], row[1]) for row in result.all()]
    logger.debug("Polygon names for %s: %d found", scope.requester_id, len(names))
    return names


async def get_polygon(
    session: AsyncSession,
    scope: AccessScope,
    polygon_id: uuid.UUID,
) -> Polygon | None:
    stmt = _polygon_query(scope).where(Polygon.polygon_id == polygon_id)
    result = await session.execute(stmt)
    return result.unique().scalar_one_or_none()


async def get_polygon_by_name(
    session: AsyncSession,
    scope: AccessScope,
    polygon_name: str,
) -> Polygon | None:
    """Return the oldest visible polygon with this name.

    Names are not unique; when several visible polygons share a name the
    earliest created one wins.
    """
    stmt = (
        _polygon_query(scope)
        .where(Polygon.polygon_name == polygon_name)
        .order_by(Polygon.created_date)
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.unique().scalars().first()


async def create_polygon(
    session: AsyncSession,
    scope: AccessScope,
    name: str,
    points: list[PointRequest],
) -> Polygon:
    """Create a polygon owned by the requester. Point order follows list position."""
    polygon = Polygon(
        polygon_id=uuid.uuid4(),
        polygon_name=name,
        created_by_user_id=scope.requester_id,
        points=[
            PolygonPoint(
                point_id=uuid.uuid4(),
                latitude=p.latitude,
                longitude=p.longitude,
                order=index,
            )
            for index, p in enumerate(points)
        ],
    )
    session.add(polygon)
    polygon_id = polygon.polygon_id
    await session.commit()
    logger.info("Polygon %s created by %s", polygon_id, scope.requester_id)
    return await get_polygon(session, scope, polygon_id)


async def update_polygon(
    session: AsyncSession,
    scope: AccessScope,
    polygon_id: uuid.UUID,
    name: str,
    points: list[PointRequest],
) -> Polygon | None:
    """Rename a visible polygon and replace its points wholesale.

    Returns None if the polygon is not found or not accessible.
    """
    polygon = await get_polygon(session, scope, polygon_id)
    if polygon is None:
        return None

    polygon.polygon_name = name
    polygon.points = [
        PolygonPoint(
            point_id=uuid.uuid4(),
            latitude=p.latitude,
            longitude=p.longitude,
            order=p.order,
        )
        for p in points
    ]
    await session.commit()
    return await get_polygon(session, scope, polygon_id)


async def _delete(session: AsyncSession, polygon: Polygon | None, scope: AccessScope) -> bool:
    if polygon is None:
        return False
    polygon_id = polygon.polygon_id
    await session.delete(polygon)
    await session.commit()
    logger.info("Polygon %s deleted by %s", polygon_id, scope.requester_id)
    return True


async def delete_polygon(session: AsyncSession, scope: AccessScope, polygon_id: uuid.UUID) -> bool:
    return await _delete(session, await get_polygon(session, scope, polygon_id), scope)


async def delete_polygon_by_name(session: AsyncSession, scope: AccessScope, polygon_name: str) -> bool:
    return await _delete(session, await get_polygon_by_name(session, scope, polygon_name), scope)
