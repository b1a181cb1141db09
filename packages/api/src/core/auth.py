# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies."""

import uuid

from ..schemas.auth import AccessScope


def parse_user_id(raw: str) -> uuid.UUID:
    """Parse a token subject or header value into a user id.

    Raises:
        ValueError: ``raw`` is not a UUID.
    """
    return uuid.UUID(str(raw).strip())


def build_access_scope(requester_id: uuid.UUID, related_user_ids) -> AccessScope:
    """Wrap a resolver result into the per-request AccessScope."""
    return AccessScope(
        requester_id=requester_id,
        related_user_ids=frozenset(related_user_ids),
    )
