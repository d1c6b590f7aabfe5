"""Composable filter specifications over permission records.

Specifications are handed to the permission store, which may evaluate them
in memory (is_satisfied_by) or translate them into its own query language.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from uuid import UUID

from warden.domain.entities import Permission
from warden.domain.value_objects import (
    EntitiesGroupScope,
    EntityKeyScope,
    GlobalScope,
    GroupSubject,
    UserSubject,
)


class Specification(ABC):
    """Base predicate over Permission. Combine with & and |."""

    @abstractmethod
    def is_satisfied_by(self, permission: Permission) -> bool: ...

    def __and__(self, other: "Specification") -> "AllOf":
        return AllOf((self, other))

    def __or__(self, other: "Specification") -> "AnyOf":
        return AnyOf((self, other))


@dataclass(frozen=True)
class AllOf(Specification):
    """Conjunction. An empty AllOf matches everything."""

    parts: tuple[Specification, ...]

    def is_satisfied_by(self, permission: Permission) -> bool:
        return all(p.is_satisfied_by(permission) for p in self.parts)

    def __and__(self, other: Specification) -> "AllOf":
        return AllOf((*self.parts, other))


@dataclass(frozen=True)
class AnyOf(Specification):
    """Disjunction. An empty AnyOf matches nothing."""

    parts: tuple[Specification, ...]

    def is_satisfied_by(self, permission: Permission) -> bool:
        return any(p.is_satisfied_by(permission) for p in self.parts)

    def __or__(self, other: Specification) -> "AnyOf":
        return AnyOf((*self.parts, other))


@dataclass(frozen=True)
class SubjectIn(Specification):
    """Permission written for one of the users or one of the users groups."""

    user_ids: frozenset[str] = field(default_factory=frozenset)
    group_ids: frozenset[UUID] = field(default_factory=frozenset)

    def is_satisfied_by(self, permission: Permission) -> bool:
        subject = permission.subject
        if isinstance(subject, UserSubject):
            return subject.user_id in self.user_ids
        if isinstance(subject, GroupSubject):
            return subject.group_id in self.group_ids
        return False


@dataclass(frozen=True)
class OperationNameIn(Specification):
    """Permission on one of the named operations."""

    names: tuple[str, ...]

    def is_satisfied_by(self, permission: Permission) -> bool:
        return permission.operation.name in self.names


@dataclass(frozen=True)
class IsGlobal(Specification):
    """Permission with global scope."""

    def is_satisfied_by(self, permission: Permission) -> bool:
        return isinstance(permission.scope, GlobalScope)


@dataclass(frozen=True)
class EntityKeyIs(Specification):
    """Permission scoped to the entity with this key."""

    key: UUID

    def is_satisfied_by(self, permission: Permission) -> bool:
        scope = permission.scope
        return isinstance(scope, EntityKeyScope) and scope.key == self.key


@dataclass(frozen=True)
class EntitiesGroupIn(Specification):
    """Permission scoped to one of the entities groups."""

    group_ids: frozenset[UUID]

    def is_satisfied_by(self, permission: Permission) -> bool:
        scope = permission.scope
        return isinstance(scope, EntitiesGroupScope) and scope.group_id in self.group_ids
