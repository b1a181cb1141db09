# This project was developed with assistance from AI tools.
"""Role management request/response schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AssignRoleRequest(BaseModel):
    """Grant a role to a user. The administrator is the authenticated caller.

    Blank values are accepted here and rejected by the writer so the error
    taxonomy stays in one place.
    """

    username: str | None = None
    role_name: str | None = None


class RoleAssignmentResult(BaseModel):
    """Confirmation returned after a successful grant."""

    message: str
    user_id: uuid.UUID
    role_id: uuid.UUID
    role_name: str
    created_by_user_id: uuid.UUID
    replaced_role_id: uuid.UUID | None = None


class RoleResponse(BaseModel):
    """Role owned by the caller with its current member count."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    role_name: str
    created_by_user_id: uuid.UUID
    created_at: datetime
    member_count: int = 0


class RoleListResponse(BaseModel):
    data: list[RoleResponse]
    count: int
