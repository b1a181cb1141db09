# This project was developed with assistance from AI tools.
"""Role and assignment directory.

The resolver and the role assignment writer never touch the session
directly. They go through this interface so the check-then-write sequence of
a grant runs as one transactional unit, and so both can be exercised against
an in-memory directory in tests.
"""

import logging
import uuid
from collections.abc import Iterable
from typing import Protocol

from db import Role, User, UserRole
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ConflictError

logger = logging.getLogger(__name__)


class AccessDirectory(Protocol):
    """Storage contract consumed by the resolver and the writer."""

    async def get_user(self, user_id: uuid.UUID) -> User | None: ...

    async def get_user_by_username(self, username: str, *, for_update: bool = False) -> User | None: ...

    async def role_creators_for(self, user_id: uuid.UUID) -> set[uuid.UUID]: ...

    async def members_of_creators(self, creator_ids: Iterable[uuid.UUID]) -> set[uuid.UUID]: ...

    async def held_roles(self, user_id: uuid.UUID) -> list[Role]: ...

    async def find_role(self, role_name: str, created_by_user_id: uuid.UUID) -> Role | None: ...

    async def create_role(self, role_name: str, created_by_user_id: uuid.UUID) -> Role: ...

    async def add_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None: ...

    async def remove_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class SqlAccessDirectory:
    """AccessDirectory backed by an AsyncSession.

    ``get_user_by_username(..., for_update=True)`` takes a row lock on the
    user, which serializes concurrent grants targeting the same user until
    the surrounding transaction commits or rolls back.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: uuid.UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def get_user_by_username(self, username: str, *, for_update: bool = False) -> User | None:
        stmt = select(User).where(User.username == username)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def role_creators_for(self, user_id: uuid.UUID) -> set[uuid.UUID]:
        stmt = (
            select(Role.created_by_user_id)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def members_of_creators(self, creator_ids: Iterable[uuid.UUID]) -> set[uuid.UUID]:
        creator_ids = list(creator_ids)
        if not creator_ids:
            return set()
        stmt = (
            select(UserRole.user_id)
            .join(Role, Role.id == UserRole.role_id)
            .where(Role.created_by_user_id.in_(creator_ids))
            .distinct()
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def held_roles(self, user_id: uuid.UUID) -> list[Role]:
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_role(self, role_name: str, created_by_user_id: uuid.UUID) -> Role | None:
        stmt = select(Role).where(
            Role.role_name == role_name,
            Role.created_by_user_id == created_by_user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_role(self, role_name: str, created_by_user_id: uuid.UUID) -> Role:
        role = Role(id=uuid.uuid4(), role_name=role_name, created_by_user_id=created_by_user_id)
        self.session.add(role)
        await self._flush()
        return role

    async def add_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        self.session.add(UserRole(user_id=user_id, role_id=role_id))
        await self._flush()

    async def remove_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        await self.session.execute(
            delete(UserRole).where(UserRole.user_id == user_id, UserRole.role_id == role_id)
        )

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("Assignment commit rejected by constraint: %s", exc.orig)
            raise ConflictError("Concurrent role assignment detected; retry the request.") from exc

    async def rollback(self) -> None:
        await self.session.rollback()

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("Assignment write rejected by constraint: %s", exc.orig)
            raise ConflictError("Concurrent role assignment detected; retry the request.") from exc
