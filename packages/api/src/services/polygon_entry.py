# This project was developed with assistance from AI tools.
"""Polygon entry service with owner-scope filtering."""

import logging
import uuid
from decimal import Decimal

from db import PolygonEntry
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import AccessScope
from .polygon import get_polygon
from .scope import apply_owner_scope

logger = logging.getLogger(__name__)


def _entry_query(scope: AccessScope):
    return apply_owner_scope(select(PolygonEntry), PolygonEntry.created_by_user_id, scope)


async def list_entries(
    session: AsyncSession,
    scope: AccessScope,
    *,
    polygon_id: uuid.UUID | None = None,
) -> list[PolygonEntry]:
    """Return visible entries, optionally narrowed to one polygon."""
    stmt = _entry_query(scope).order_by(PolygonEntry.created_date.desc())
    if polygon_id is not None:
        stmt = stmt.where(PolygonEntry.polygon_id == polygon_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_entry(
    session: AsyncSession,
    scope: AccessScope,
    entry_id: uuid.UUID,
) -> PolygonEntry | None:
    stmt = _entry_query(scope).where(PolygonEntry.polygon_entry_id == entry_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_entry(
    session: AsyncSession,
    scope: AccessScope,
    *,
    category: str,
    value: Decimal,
    polygon_id: uuid.UUID | None = None,
) -> PolygonEntry | None:
    """Record an entry owned by the requester.

    Returns None when ``polygon_id`` names a polygon the requester cannot see.
    """
    if polygon_id is not None and await get_polygon(session, scope, polygon_id) is None:
        return None

    entry = PolygonEntry(
        polygon_entry_id=uuid.uuid4(),
        polygon_id=polygon_id,
        created_by_user_id=scope.requester_id,
        category=category,
        value=value,
    )
    session.add(entry)
    entry_id = entry.polygon_entry_id
    await session.commit()
    return await get_entry(session, scope, entry_id)


async def delete_entry(session: AsyncSession, scope: AccessScope, entry_id: uuid.UUID) -> bool:
    entry = await get_entry(session, scope, entry_id)
    if entry is None:
        return False
    await session.delete(entry)
    await session.commit()
    logger.info("Polygon entry %s deleted by %s", entry_id, scope.requester_id)
    return True
