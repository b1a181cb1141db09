# This project was developed with assistance from AI tools.
"""Task tracking between users.

A task is visible to the user who created it and the user it is assigned to,
and to nobody else. A task can only be assigned to a user inside the
creator's access scope, checked with the same owner predicate that filters
owned records, so an administrator's group can hand work to each other but
not to other tenants.

Updates and deletes are guarded by the task's version counter: if another
request changed or removed the row after it was read, the write matches
nothing and surfaces as ConflictError.
"""

import logging
import uuid

from db import Task, User
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from ..core.errors import ConflictError, NotFoundError
from ..schemas.auth import AccessScope
from .scope import owner_predicate

logger = logging.getLogger(__name__)


def _participant(user_id: uuid.UUID):
    return or_(Task.created_by_user_id == user_id, Task.assigned_to_user_id == user_id)


def _task_query(user_id: uuid.UUID):
    return select(Task).options(selectinload(Task.assigned_to_user)).where(_participant(user_id))


async def _commit_versioned(session: AsyncSession, task_id: uuid.UUID) -> None:
    try:
        await session.commit()
    except StaleDataError as exc:
        await session.rollback()
        logger.warning("Task %s changed concurrently: %s", task_id, exc)
        raise ConflictError("Task was changed or removed by another request.") from exc


async def list_tasks(session: AsyncSession, user_id: uuid.UUID) -> list[Task]:
    """Tasks the user created or was assigned, newest first."""
    stmt = _task_query(user_id).order_by(Task.created_at.desc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_task(session: AsyncSession, user_id: uuid.UUID, task_id: uuid.UUID) -> Task | None:
    result = await session.execute(_task_query(user_id).where(Task.id == task_id))
    return result.scalar_one_or_none()


async def create_task(
    session: AsyncSession,
    scope: AccessScope,
    *,
    title: str,
    description: str | None,
    status: str,
    assigned_to_username: str,
) -> Task:
    """Create a task from the requester to a user in the requester's scope.

    Raises:
        NotFoundError: the assignee does not exist or is outside the scope.
    """
    stmt = select(User).where(
        User.username == assigned_to_username,
        owner_predicate(User.id, scope),
    )
    assignee = (await session.execute(stmt)).scalar_one_or_none()
    if assignee is None:
        raise NotFoundError(f"User '{assigned_to_username}' not found.")

    task = Task(
        id=uuid.uuid4(),
        title=title,
        description=description,
        status=status,
        created_by_user_id=scope.requester_id,
        assigned_to_user_id=assignee.id,
    )
    session.add(task)
    task_id = task.id
    await session.commit()
    logger.info("Task %s created by %s for %s", task_id, scope.requester_id, assignee.id)
    return await get_task(session, scope.requester_id, task_id)


async def update_task_status(
    session: AsyncSession,
    user_id: uuid.UUID,
    task_id: uuid.UUID,
    new_status: str,
    *,
    expected_version: int | None = None,
) -> Task:
    """Set a task's status.

    Raises:
        NotFoundError: no such task, or the user is neither creator nor assignee.
        ConflictError: ``expected_version`` is stale, or a concurrent request
            changed or deleted the task first.
    """
    task = await get_task(session, user_id, task_id)
    if task is None:
        raise NotFoundError("Task not found.")
    if expected_version is not None and expected_version != task.version:
        raise ConflictError(
            f"Task is at version {task.version}, not {expected_version}; reload and retry."
        )

    task.status = new_status
    await _commit_versioned(session, task_id)
    logger.info("Task %s status set to '%s' by %s", task_id, new_status, user_id)
    return task


async def delete_task(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    title: str,
    assigned_to_username: str,
) -> uuid.UUID:
    """Delete the oldest task with this title assigned to ``assigned_to_username``.

    Only tasks the user created or was assigned are considered.

    Raises:
        NotFoundError: the assignee or a matching task does not exist.
        ConflictError: a concurrent request changed or deleted the task first.
    """
    assignee_stmt = select(User).where(User.username == assigned_to_username)
    assignee = (await session.execute(assignee_stmt)).scalar_one_or_none()
    if assignee is None:
        raise NotFoundError(f"User '{assigned_to_username}' not found.")

    stmt = (
        _task_query(user_id)
        .where(Task.title == title, Task.assigned_to_user_id == assignee.id)
        .order_by(Task.created_at)
        .limit(1)
    )
    task = (await session.execute(stmt)).scalars().first()
    if task is None:
        raise NotFoundError(f"No task '{title}' assigned to '{assigned_to_username}'.")

    task_id = task.id
    await session.delete(task)
    await _commit_versioned(session, task_id)
    logger.info("Task %s deleted by %s", task_id, user_id)
    return task_id
