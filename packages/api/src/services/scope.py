# This project was developed with assistance from AI tools.
"""Shared owner-scope filtering for owned-record queries.

Centralizes the AccessScope -> SQL WHERE logic so that every list, get,
update, and delete on owned records applies the same predicate:

    owner == requester OR owner IN related_user_ids

Rows that fail the predicate behave as if they do not exist. The
join_to_polygon parameter handles child entities (parcel data) whose owner
is the owning polygon's creator.
"""

from db import Polygon
from sqlalchemy import or_

from ..schemas.auth import AccessScope


def owner_predicate(owner_column, scope: AccessScope):
    """Build the visibility predicate for a ``created_by_user_id`` column."""
    if not scope.related_user_ids:
        return owner_column == scope.requester_id
    return or_(
        owner_column == scope.requester_id,
        owner_column.in_(sorted(scope.related_user_ids)),
    )


def apply_owner_scope(stmt, owner_column, scope: AccessScope, *, join_to_polygon=None):
    """Apply owner scope filtering to a SQLAlchemy query.

    Args:
        stmt: A SQLAlchemy select/update/delete statement.
        owner_column: Column holding the owning user id. Ignored when
            ``join_to_polygon`` is given.
        scope: The caller's AccessScope.
        join_to_polygon: ORM relationship attribute to join to reach Polygon
            (e.g., ``GrainParcelData.polygon``). Visibility is then that of
            the polygon.

    Returns:
        The filtered statement.
    """
    if join_to_polygon is not None:
        stmt = stmt.join(join_to_polygon)
        owner_column = Polygon.created_by_user_id
    return stmt.where(owner_predicate(owner_column, scope))
