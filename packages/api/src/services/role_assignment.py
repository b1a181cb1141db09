# This project was developed with assistance from AI tools.
"""Role assignment writer.

An administrator grants a role, named within the administrator's own
namespace, to a user. The writer keeps the tenant invariant the resolver
depends on: a user holds roles from at most one administrator, and at most one
role from that administrator.

  Unassigned        -> Assigned(A, R)     allowed
  Assigned(A, R)    -> Assigned(A, R')    allowed, R is replaced
  Assigned(A, R)    -> Assigned(B, *)     rejected with ConflictError

All reads and writes of one grant happen in a single transaction that starts
by locking the target user row, so two administrators racing for the same
user cannot both pass the conflict check. Nothing is retried here; a lost race
surfaces as ConflictError and the caller decides whether to retry.
"""

import logging
import uuid

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..schemas.role import RoleAssignmentResult
from .directory import AccessDirectory

logger = logging.getLogger(__name__)


async def assign_role(
    directory: AccessDirectory,
    *,
    admin_id: uuid.UUID,
    username: str | None,
    role_name: str | None,
) -> RoleAssignmentResult:
    """Grant ``role_name`` (owned by ``admin_id``) to ``username``.

    Raises:
        ValidationError: username or role name is missing or blank.
        NotFoundError: no user with that username, or the administrator
            has no user profile.
        ConflictError: the user already belongs to another administrator's
            tenant, or a concurrent write won the race.
    """
    username = (username or "").strip()
    role_name = (role_name or "").strip()
    if not username or not role_name:
        raise ValidationError("Username and role name are required.")

    try:
        if await directory.get_user(admin_id) is None:
            raise NotFoundError(f"Administrator {admin_id} has no user profile.")

        target = await directory.get_user_by_username(username, for_update=True)
        if target is None:
            raise NotFoundError(f"User '{username}' not found.")

        held = await directory.held_roles(target.id)
        foreign = [r for r in held if r.created_by_user_id != admin_id]
        if foreign:
            logger.warning(
                "Cross-tenant grant rejected: admin=%s user=%s already held from creator(s) %s",
                admin_id,
                target.id,
                sorted({str(r.created_by_user_id) for r in foreign}),
            )
            raise ConflictError(
                f"User '{username}' already holds a role from another administrator."
            )

        role = await directory.find_role(role_name, admin_id)
        if role is None:
            role = await directory.create_role(role_name, admin_id)
            logger.info("Created role %s '%s' for admin=%s", role.id, role_name, admin_id)

        replaced_role_id = None
        already_held = False
        for existing in held:
            if existing.id == role.id:
                already_held = True
                continue
            await directory.remove_assignment(target.id, existing.id)
            replaced_role_id = existing.id

        if not already_held:
            await directory.add_assignment(target.id, role.id)

        await directory.commit()
    except Exception:
        await directory.rollback()
        raise

    logger.info(
        "Role granted: admin=%s user=%s role=%s replaced=%s",
        admin_id,
        target.id,
        role.id,
        replaced_role_id,
    )
    return RoleAssignmentResult(
        message=f"Role '{role_name}' assigned to '{username}'.",
        user_id=target.id,
        role_id=role.id,
        role_name=role_name,
        created_by_user_id=admin_id,
        replaced_role_id=replaced_role_id,
    )
