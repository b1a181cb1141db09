# This project was developed with assistance from AI tools.
"""In-memory AccessDirectory for unit tests.

Mirrors SqlAccessDirectory's contract, including transactional behaviour:
the first mutation after a commit/rollback snapshots state, and rollback()
restores that snapshot. Users and roles are real (transient) ORM instances.
"""

import copy
import uuid
from collections.abc import Iterable

from db import Role, User

from src.core.errors import ConflictError


class InMemoryAccessDirectory:
    def __init__(self):
        self.users: dict[uuid.UUID, User] = {}
        self.roles: dict[uuid.UUID, Role] = {}
        self.assignments: set[tuple[uuid.UUID, uuid.UUID]] = set()
        self.commits = 0
        self.rollbacks = 0
        self.locked_usernames: list[str] = []
        self.fail_next_commit = False
        self._snapshot = None

    # -- seeding helpers (bypass the writer) --

    def add_user(self, username: str, user_id: uuid.UUID | None = None) -> User:
        user = User(
            id=user_id or uuid.uuid4(),
            username=username,
            email=f"{username}@example.com",
            name=username.title(),
            last_name="Test",
        )
        self.users[user.id] = user
        return user

    def seed_role(self, role_name: str, creator_id: uuid.UUID) -> Role:
        role = Role(id=uuid.uuid4(), role_name=role_name, created_by_user_id=creator_id)
        self.roles[role.id] = role
        return role

    def seed_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        self.assignments.add((user_id, role_id))

    def roles_of(self, user_id: uuid.UUID) -> list[Role]:
        return [self.roles[rid] for uid, rid in self.assignments if uid == user_id]

    # -- AccessDirectory --

    async def get_user(self, user_id: uuid.UUID) -> User | None:
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str, *, for_update: bool = False) -> User | None:
        if for_update:
            self.locked_usernames.append(username)
        return next((u for u in self.users.values() if u.username == username), None)

    async def role_creators_for(self, user_id: uuid.UUID) -> set[uuid.UUID]:
        return {r.created_by_user_id for r in self.roles_of(user_id)}

    async def members_of_creators(self, creator_ids: Iterable[uuid.UUID]) -> set[uuid.UUID]:
        creator_ids = set(creator_ids)
        return {
            uid
            for uid, rid in self.assignments
            if self.roles[rid].created_by_user_id in creator_ids
        }

    async def held_roles(self, user_id: uuid.UUID) -> list[Role]:
        return self.roles_of(user_id)

    async def find_role(self, role_name: str, created_by_user_id: uuid.UUID) -> Role | None:
        return next(
            (
                r
                for r in self.roles.values()
                if r.role_name == role_name and r.created_by_user_id == created_by_user_id
            ),
            None,
        )

    async def create_role(self, role_name: str, created_by_user_id: uuid.UUID) -> Role:
        self._begin()
        return self.seed_role(role_name, created_by_user_id)

    async def add_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        self._begin()
        self.assignments.add((user_id, role_id))

    async def remove_assignment(self, user_id: uuid.UUID, role_id: uuid.UUID) -> None:
        self._begin()
        self.assignments.discard((user_id, role_id))

    async def commit(self) -> None:
        if self.fail_next_commit:
            self.fail_next_commit = False
            await self.rollback()
            raise ConflictError("Concurrent role assignment detected; retry the request.")
        self.commits += 1
        self._snapshot = None

    async def rollback(self) -> None:
        self.rollbacks += 1
        if self._snapshot is not None:
            self.roles, self.assignments = self._snapshot
            self._snapshot = None

    def _begin(self) -> None:
        if self._snapshot is None:
            self._snapshot = (dict(self.roles), copy.copy(self.assignments))
