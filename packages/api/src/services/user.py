# This project was developed with assistance from AI tools.
"""User directory service."""

import logging
import uuid

from db import User
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import AccessError, ConflictError, ValidationError
from .directory import SqlAccessDirectory
from .role_assignment import assign_role

logger = logging.getLogger(__name__)


async def register_user(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    username: str | None,
    email: str | None,
    name: str | None,
    last_name: str | None,
    is_admin: bool = False,
    admin_role_name: str = "admin",
) -> User:
    """Create the local profile for an authenticated identity.

    An administrator is granted ``admin_role_name`` in its own namespace
    through the role assignment writer, which makes it a member of its own
    tenant group. The profile and the grant commit together; if the grant
    fails neither is kept, so registration can simply be retried.

    Raises:
        ValidationError: a required field is blank.
        ConflictError: the identity, username, or email is already taken.
    """
    fields = {
        "username": (username or "").strip(),
        "email": (email or "").strip(),
        "name": (name or "").strip(),
        "last_name": (last_name or "").strip(),
    }
    missing = [k for k, v in fields.items() if not v]
    if missing:
        raise ValidationError(f"Required fields missing: {', '.join(missing)}.")

    if await session.get(User, user_id) is not None:
        raise ConflictError("A profile already exists for this identity.")

    stmt = select(User).where(
        or_(User.username == fields["username"], User.email == fields["email"])
    )
    clash = (await session.execute(stmt)).scalars().first()
    if clash is not None:
        if clash.username == fields["username"]:
            raise ConflictError("Username already in use.")
        raise ConflictError("Email already in use.")

    user = User(id=user_id, **fields)
    session.add(user)
    try:
        await session.flush()
        if is_admin:
            # The writer commits the profile together with the grant, or
            # rolls both back.
            await assign_role(
                SqlAccessDirectory(session),
                admin_id=user_id,
                username=fields["username"],
                role_name=admin_role_name,
            )
        else:
            await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError("Username or email already in use.") from exc
    except AccessError:
        await session.rollback()
        raise
    logger.info("Registered user %s (%s), admin=%s", user_id, fields["username"], is_admin)
    return user


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()
