# This project was developed with assistance from AI tools.
"""Read-side queries over the roles an administrator has defined."""

import uuid

from db import Role, UserRole
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def list_owned_roles(session: AsyncSession, admin_id: uuid.UUID) -> list[tuple[Role, int]]:
    """Return (role, member_count) for every role created by ``admin_id``."""
    stmt = (
        select(Role, func.count(UserRole.user_id))
        .outerjoin(UserRole, UserRole.role_id == Role.id)
        .where(Role.created_by_user_id == admin_id)
        .group_by(Role.id)
        .order_by(Role.role_name)
    )
    result = await session.execute(stmt)
    return [(row[0], row[1]) for row in result.all()]
