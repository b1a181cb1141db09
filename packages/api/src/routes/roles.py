# This project was developed with assistance from AI tools.
"""Role management routes.

The administrator granting a role is always the authenticated caller; it is
never read from the request body.
"""

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..middleware.auth import CurrentUser
from ..schemas.role import AssignRoleRequest, RoleAssignmentResult, RoleListResponse, RoleResponse
from ..services.directory import SqlAccessDirectory
from ..services.role_assignment import assign_role
from ..services.roles import list_owned_roles

router = APIRouter()


@router.post("/assign", response_model=RoleAssignmentResult)
async def assign(
    body: AssignRoleRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> RoleAssignmentResult:
    """Grant a role from the caller's namespace to a user.

    409 if the user already belongs to another administrator's tenant.
    """
    try:
        return await assign_role(
            SqlAccessDirectory(session),
            admin_id=user.user_id,
            username=body.username,
            role_name=body.role_name,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.get("/", response_model=RoleListResponse)
async def list_roles(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> RoleListResponse:
    """List roles the caller has created, with current member counts."""
    rows = await list_owned_roles(session, user.user_id)
    data = [
        RoleResponse(
            id=role.id,
            role_name=role.role_name,
            created_by_user_id=role.created_by_user_id,
            created_at=role.created_at,
            member_count=count,
        )
        for role, count in rows
    ]
    return RoleListResponse(data=data, count=len(data))
