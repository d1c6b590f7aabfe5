"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from warden.application.ports import UnitOfWorkFactory
from warden.infrastructure.persistence.postgres.entities_group_resolver import (
    PostgresEntitiesGroupResolver,
)
from warden.infrastructure.persistence.postgres.errors import translate_driver_errors
from warden.infrastructure.persistence.postgres.group_closure_resolver import (
    PostgresGroupClosureResolver,
)
from warden.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one read-only transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        async with translate_driver_errors("Connection checkout"):
            self._conn = await self._conn_cm.__aenter__()
        self._permissions = PostgresPermissionRepository(self._conn)
        self._group_closure = PostgresGroupClosureResolver(self._conn)
        self._entities_groups = PostgresEntitiesGroupResolver(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        try:
            if self._conn is not None and not self._conn.closed:
                async with translate_driver_errors("Rollback"):
                    await self._conn.rollback()
        finally:
            if self._conn_cm is not None:
                await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def group_closure(self) -> PostgresGroupClosureResolver:
        return self._group_closure

    @property
    def entities_groups(self) -> PostgresEntitiesGroupResolver:
        return self._entities_groups


def create_uow_factory(pool: AsyncConnectionPool) -> UnitOfWorkFactory:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with PostgresUnitOfWork(pool) as uow:
            yield uow

    return factory
