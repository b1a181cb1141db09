# This project was developed with assistance from AI tools.
"""Access scope resolution.

Given a requester, compute the set of users whose owned records the requester
may see. The traversal is exactly two hops:

  1. creators -- every administrator that created a role the requester holds
  2. members  -- every user holding any role created by one of those creators

It does not recurse: an administrator who is itself a member of another
administrator's tenant does not pull that second tenant into scope.

The result may or may not contain the requester. Callers must OR in
``owner == requester`` themselves (``services.scope.owner_predicate`` does this).
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import build_access_scope
from ..schemas.auth import AccessScope
from .directory import AccessDirectory, SqlAccessDirectory

logger = logging.getLogger(__name__)


async def resolve_related_users(
    directory: AccessDirectory,
    requester_id: uuid.UUID,
) -> frozenset[uuid.UUID]:
    """Return the ids of every user in a tenant group the requester belongs to.

    Pure read. A requester with no assignments resolves to an empty set,
    never an error.
    """
    creators = await directory.role_creators_for(requester_id)
    if not creators:
        logger.debug("Scope for %s: no role creators, self only", requester_id)
        return frozenset()

    related = frozenset(await directory.members_of_creators(creators))
    logger.debug(
        "Scope for %s: %d creator(s), %d related user(s)",
        requester_id,
        len(creators),
        len(related),
    )
    return related


async def resolve_access_scope(session: AsyncSession, requester_id: uuid.UUID) -> AccessScope:
    """Resolve the requester's scope against the database."""
    related = await resolve_related_users(SqlAccessDirectory(session), requester_id)
    return build_access_scope(requester_id, related)
