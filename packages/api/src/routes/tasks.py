# This project was developed with assistance from AI tools.
"""Task routes. The creator and the acting user are always the caller."""

import uuid

from db import Task, get_db
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ConflictError, NotFoundError
from ..middleware.auth import CurrentScope, CurrentUser
from ..schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskStatusUpdate
from ..services import task as task_service

router = APIRouter()


def _build_task_response(task: Task) -> TaskResponse:
    assignee = task.assigned_to_user
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        created_by_user_id=task.created_by_user_id,
        assigned_to_user_id=task.assigned_to_user_id,
        assigned_to_username=assignee.username,
        assigned_to_name=f"{assignee.name} {assignee.last_name}",
        version=task.version,
        created_at=task.created_at,
    )


@router.get("/", response_model=TaskListResponse)
async def list_tasks(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> TaskListResponse:
    """Tasks the caller created or was assigned, newest first."""
    tasks = await task_service.list_tasks(session, user.user_id)
    return TaskListResponse(data=[_build_task_response(t) for t in tasks], count=len(tasks))


@router.post("/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: TaskCreate,
    scope: CurrentScope,
    session: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Assign a task to a user in the caller's group. 404 for anyone else."""
    try:
        task = await task_service.create_task(
            session,
            scope,
            title=body.title,
            description=body.description,
            status=body.status,
            assigned_to_username=body.assigned_to_username,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _build_task_response(task)


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: uuid.UUID,
    body: TaskStatusUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> TaskResponse:
    try:
        task = await task_service.update_task_status(
            session,
            user.user_id,
            task_id,
            body.new_status,
            expected_version=body.expected_version,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _build_task_response(task)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    user: CurrentUser,
    title: str = Query(min_length=1),
    username: str = Query(min_length=1),
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a task by title and assignee username."""
    try:
        await task_service.delete_task(
            session,
            user.user_id,
            title=title,
            assigned_to_username=username,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
