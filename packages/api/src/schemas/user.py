# This project was developed with assistance from AI tools.
"""User directory schemas."""

import uuid

from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    """Create the local profile for the authenticated identity."""

    username: str | None = None
    email: str | None = None
    name: str | None = None
    last_name: str | None = None
    is_admin: bool = False


class UserResponse(BaseModel):
    """Public user profile. Never carries credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    name: str
    last_name: str
