"""Unit of Work port - read boundary over the permission store."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from warden.application.ports.entities_group_resolver import EntitiesGroupResolver
from warden.application.ports.group_closure_resolver import GroupClosureResolver
from warden.application.ports.repositories.permission_repository import (
    PermissionRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - one connection shared by the store collaborators."""

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def group_closure(self) -> GroupClosureResolver: ...

    @property
    def entities_groups(self) -> EntitiesGroupResolver: ...


class UnitOfWorkFactory(Protocol):
    """Factory returning an async context manager that yields a UnitOfWork."""

    def __call__(self) -> AbstractAsyncContextManager[UnitOfWork]: ...
