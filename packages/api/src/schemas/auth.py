# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class AccessScope(BaseModel):
    """Visibility scope of one requester, resolved once per request.

    ``related_user_ids`` is the raw resolver output and may or may not contain
    the requester. Visibility itself is decided in SQL by
    ``services.scope.owner_predicate``.
    """

    model_config = ConfigDict(frozen=True)

    requester_id: uuid.UUID
    related_user_ids: frozenset[uuid.UUID] = Field(default_factory=frozenset)


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: uuid.UUID
    email: str = ""
    name: str = ""
    username: str = ""


class TokenPayload(BaseModel):
    """Decoded JWT token claims from Keycloak."""

    sub: str
    email: str = ""
    preferred_username: str = ""
    name: str = ""


class ScopeResponse(BaseModel):
    """The caller's visibility scope, as returned by /api/users/me/scope."""

    requester_id: uuid.UUID
    related_user_ids: list[uuid.UUID]
