"""Unit tests for PostgreSQL adapters with a mocked connection."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import psycopg
import pytest
from psycopg_pool import PoolTimeout

from warden.domain.exceptions import CollaboratorUnavailable
from warden.domain.specifications import IsGlobal, OperationNameIn
from warden.infrastructure.persistence.postgres.entities_group_resolver import (
    PostgresEntitiesGroupResolver,
)
from warden.infrastructure.persistence.postgres.group_closure_resolver import (
    PostgresGroupClosureResolver,
)
from warden.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from warden.infrastructure.persistence.postgres.unit_of_work import (
    PostgresUnitOfWork,
    create_uow_factory,
)


def _conn(rows: list[tuple]) -> MagicMock:
    cursor = MagicMock()
    cursor.fetchall = AsyncMock(return_value=rows)
    cursor.fetchone = AsyncMock(return_value=rows[0] if rows else None)
    conn = MagicMock()
    conn.execute = AsyncMock(return_value=cursor)
    return conn


@pytest.mark.asyncio
async def test_group_closure_returns_ids() -> None:
    a, b = uuid4(), uuid4()
    conn = _conn([(a,), (b,)])
    assert await PostgresGroupClosureResolver(conn).resolve("alice") == {a, b}
    sql, params = conn.execute.call_args.args
    assert "WITH RECURSIVE" in sql
    assert params == ("alice",)


@pytest.mark.asyncio
async def test_entities_groups_returns_ids() -> None:
    key, group = uuid4(), uuid4()
    conn = _conn([(group,)])
    assert await PostgresEntitiesGroupResolver(conn).resolve(key) == {group}
    assert conn.execute.call_args.args[1] == (key,)


@pytest.mark.asyncio
async def test_query_compiles_where_clause() -> None:
    perm_id, op_id = uuid4(), uuid4()
    conn = _conn([(perm_id, "alice", None, None, None, 1, True, op_id, "/Doc", "Documents")])

    result = await PostgresPermissionRepository(conn).query(
        OperationNameIn(("/Doc",)) & IsGlobal()
    )

    assert [p.id for p in result] == [perm_id]
    sql, params = conn.execute.call_args.args
    assert "JOIN operation op" in sql
    assert "WHERE (op.name = ANY(%s) AND" in sql
    assert params == [["/Doc"]]


@pytest.mark.asyncio
async def test_get_by_id_missing() -> None:
    assert await PostgresPermissionRepository(_conn([])).get_by_id(uuid4()) is None


@pytest.mark.asyncio
async def test_query_driver_failure_is_collaborator_unavailable() -> None:
    conn = MagicMock()
    conn.execute = AsyncMock(side_effect=psycopg.OperationalError("server closed the connection"))
    with pytest.raises(CollaboratorUnavailable):
        await PostgresPermissionRepository(conn).query(IsGlobal())


def _pool(conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    conn_cm = MagicMock()
    conn_cm.__aenter__ = AsyncMock(return_value=conn)
    conn_cm.__aexit__ = AsyncMock(return_value=None)
    pool = MagicMock()
    pool.connection = MagicMock(return_value=conn_cm)
    return pool, conn_cm


def _open_conn() -> MagicMock:
    conn = MagicMock()
    conn.closed = False
    conn.rollback = AsyncMock()
    return conn


@pytest.mark.asyncio
async def test_unit_of_work_rolls_back_and_returns_connection() -> None:
    conn = _open_conn()
    pool, conn_cm = _pool(conn)

    async with create_uow_factory(pool)() as uow:
        assert isinstance(uow, PostgresUnitOfWork)
        assert isinstance(uow.permissions, PostgresPermissionRepository)

    conn.rollback.assert_awaited_once()
    conn_cm.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_unit_of_work_failed_rollback_still_returns_connection() -> None:
    conn = _open_conn()
    conn.rollback = AsyncMock(side_effect=psycopg.OperationalError("server closed the connection"))
    pool, conn_cm = _pool(conn)

    with pytest.raises(CollaboratorUnavailable, match="Rollback"):
        async with PostgresUnitOfWork(pool):
            pass

    conn_cm.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_unit_of_work_skips_rollback_on_closed_connection() -> None:
    conn = _open_conn()
    conn.closed = True
    pool, conn_cm = _pool(conn)

    async with PostgresUnitOfWork(pool):
        pass

    conn.rollback.assert_not_awaited()
    conn_cm.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_unit_of_work_checkout_timeout_is_collaborator_unavailable() -> None:
    conn_cm = MagicMock()
    conn_cm.__aenter__ = AsyncMock(side_effect=PoolTimeout("couldn't get a connection"))
    pool = MagicMock()
    pool.connection = MagicMock(return_value=conn_cm)

    with pytest.raises(CollaboratorUnavailable):
        async with PostgresUnitOfWork(pool):
            pass
