"""Pytest fixtures for Warden tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID, uuid4

import pytest

from warden.application.services.key_extractors import default_registry
from warden.application.services.permission_resolver import PermissionResolver
from warden.application.services.scope_matcher import ScopeMatcher
from warden.domain.entities import Operation, Permission
from warden.domain.specifications import Specification
from warden.domain.value_objects import (
    EntitiesGroupScope,
    EntityKeyScope,
    GlobalScope,
    GroupSubject,
    Scope,
    Subject,
    UserSubject,
)


# --- Fake collaborators ---


class FakePermissionRepository:
    """In-memory permission repository; evaluates specifications directly."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permission] = {}
        self.queries: list[Specification] = []

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        return self._by_id.get(permission_id)

    async def query(self, specification: Specification) -> list[Permission]:
        self.queries.append(specification)
        # Reverse insertion order so tests never rely on store ordering.
        return [
            p for p in reversed(list(self._by_id.values()))
            if specification.is_satisfied_by(p)
        ]

    def add(self, permission: Permission) -> Permission:
        """Helper to seed a permission for tests."""
        self._by_id[permission.id] = permission
        return permission


class FakeGroupClosureResolver:
    """In-memory users-group closure: user -> direct groups, group -> parent."""

    def __init__(self) -> None:
        self._members: dict[str, set[UUID]] = {}
        self._parents: dict[UUID, UUID] = {}

    async def resolve(self, user_id: str) -> set[UUID]:
        result: set[UUID] = set()
        pending = list(self._members.get(user_id, set()))
        while pending:
            group_id = pending.pop()
            if group_id in result:
                continue
            result.add(group_id)
            parent = self._parents.get(group_id)
            if parent is not None:
                pending.append(parent)
        return result

    def add_member(self, user_id: str, group_id: UUID) -> None:
        self._members.setdefault(user_id, set()).add(group_id)

    def set_parent(self, group_id: UUID, parent_id: UUID) -> None:
        self._parents[group_id] = parent_id


class FakeEntitiesGroupResolver:
    """In-memory entities-group membership by entity key."""

    def __init__(self) -> None:
        self._groups: dict[UUID, set[UUID]] = {}

    async def resolve(self, entity_key: UUID) -> set[UUID]:
        return set(self._groups.get(entity_key, set()))

    def add_member(self, group_id: UUID, entity_key: UUID) -> None:
        self._groups.setdefault(entity_key, set()).add(group_id)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake collaborators."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.group_closure = FakeGroupClosureResolver()
        self.entities_groups = FakeEntitiesGroupResolver()


def make_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


_OPERATIONS: dict[str, Operation] = {}


def operation(name: str) -> Operation:
    """Operation with a stable id per name."""
    if name not in _OPERATIONS:
        _OPERATIONS[name] = Operation(id=uuid4(), name=name)
    return _OPERATIONS[name]


def make_permission(
    subject: Subject | str,
    operation_name: str,
    *,
    level: int = 1,
    allow: bool = True,
    scope: Scope | None = None,
    entity_key: UUID | None = None,
    entities_group_id: UUID | None = None,
) -> Permission:
    """Build a permission; a str subject is a user id, a UUID subject is a group."""
    if isinstance(subject, str):
        subject = UserSubject(subject)
    elif isinstance(subject, UUID):
        subject = GroupSubject(subject)
    if scope is None:
        if entity_key is not None:
            scope = EntityKeyScope(entity_key)
        elif entities_group_id is not None:
            scope = EntitiesGroupScope(entities_group_id)
        else:
            scope = GlobalScope()
    return Permission(
        id=uuid4(),
        subject=subject,
        scope=scope,
        operation=operation(operation_name),
        level=level,
        allow=allow,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_factory(fake_uow)


@pytest.fixture
def scope_matcher() -> ScopeMatcher:
    return ScopeMatcher(default_registry(["document"]))


@pytest.fixture
def resolver(uow_factory, scope_matcher: ScopeMatcher) -> PermissionResolver:
    """PermissionResolver over the in-memory store."""
    return PermissionResolver(unit_of_work_factory=uow_factory, scope_matcher=scope_matcher)
