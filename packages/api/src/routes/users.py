# This project was developed with assistance from AI tools.
"""User directory routes."""

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import ConflictError, ValidationError
from ..middleware.auth import CurrentScope, CurrentUser
from ..schemas.auth import ScopeResponse
from ..schemas.user import RegisterRequest, UserResponse
from ..services import user as user_service

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Create the caller's profile. ``is_admin`` bootstraps the caller's own tenant."""
    try:
        created = await user_service.register_user(
            session,
            user.user_id,
            username=body.username,
            email=body.email,
            name=body.name,
            last_name=body.last_name,
            is_admin=body.is_admin,
            admin_role_name=settings.BOOTSTRAP_ADMIN_ROLE_NAME,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return UserResponse.model_validate(created)


@router.get("/me/scope", response_model=ScopeResponse)
async def my_scope(scope: CurrentScope) -> ScopeResponse:
    """Return the users whose records the caller can see."""
    return ScopeResponse(
        requester_id=scope.requester_id,
        related_user_ids=sorted(scope.related_user_ids),
    )


@router.get("/{username}", response_model=UserResponse)
async def get_user(
    username: str,
    _user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> UserResponse:
    found = await user_service.get_user_by_username(session, username)
    if found is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(found)
