"""PostgreSQL permission repository implementation."""

import logging
from uuid import UUID

from psycopg import AsyncConnection

from warden.domain.entities import Operation, Permission
from warden.domain.specifications import (
    AllOf,
    AnyOf,
    EntitiesGroupIn,
    EntityKeyIs,
    IsGlobal,
    OperationNameIn,
    Specification,
    SubjectIn,
)
from warden.infrastructure.persistence.postgres.errors import translate_driver_errors

logger = logging.getLogger(__name__)

_SELECT = (
    "SELECT p.id, p.user_id, p.users_group_id, p.entity_security_key, p.entities_group_id, "
    "p.level, p.allow, op.id, op.name, op.description "
    "FROM permission p JOIN operation op ON op.id = p.operation_id"
)


def compile_specification(spec: Specification) -> tuple[str, list[object]]:
    """Translate a specification into a SQL boolean expression and params. Returns (sql, params)."""
    if isinstance(spec, AllOf):
        return _join(spec.parts, " AND ", "TRUE")
    if isinstance(spec, AnyOf):
        return _join(spec.parts, " OR ", "FALSE")
    if isinstance(spec, SubjectIn):
        conditions: list[str] = []
        params: list[object] = []
        if spec.user_ids:
            conditions.append("p.user_id = ANY(%s)")
            params.append(sorted(spec.user_ids))
        if spec.group_ids:
            conditions.append("p.users_group_id = ANY(%s)")
            params.append(sorted(spec.group_ids))
        if not conditions:
            return "FALSE", []
        return "(" + " OR ".join(conditions) + ")", params
    if isinstance(spec, OperationNameIn):
        if not spec.names:
            return "FALSE", []
        return "op.name = ANY(%s)", [list(spec.names)]
    if isinstance(spec, IsGlobal):
        return "(p.entity_security_key IS NULL AND p.entities_group_id IS NULL)", []
    if isinstance(spec, EntityKeyIs):
        return "p.entity_security_key = %s", [spec.key]
    if isinstance(spec, EntitiesGroupIn):
        if not spec.group_ids:
            return "FALSE", []
        return "p.entities_group_id = ANY(%s)", [sorted(spec.group_ids)]
    raise TypeError(f"Cannot compile specification {type(spec).__name__}")


def _join(parts: tuple[Specification, ...], op: str, empty: str) -> tuple[str, list[object]]:
    if not parts:
        return empty, []
    sql_parts: list[str] = []
    params: list[object] = []
    for part in parts:
        sql, part_params = compile_specification(part)
        sql_parts.append(sql)
        params.extend(part_params)
    return "(" + op.join(sql_parts) + ")", params


def _row_to_permission(r: tuple) -> Permission:
    return Permission.from_columns(
        id=r[0],
        user_id=r[1],
        users_group_id=r[2],
        entity_security_key=r[3],
        entities_group_id=r[4],
        level=r[5],
        allow=r[6],
        operation=Operation(id=r[7], name=r[8], description=r[9]),
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        async with translate_driver_errors("Permission lookup"):
            cur = await self._conn.execute(f"{_SELECT} WHERE p.id = %s", (permission_id,))
            r = await cur.fetchone()
        if not r:
            return None
        return _row_to_permission(r)

    async def query(self, specification: Specification) -> list[Permission]:
        """List permissions matching specification (unordered)."""
        where, params = compile_specification(specification)
        logger.debug("Permission query WHERE %s", where)
        async with translate_driver_errors("Permission query"):
            cur = await self._conn.execute(f"{_SELECT} WHERE {where}", params)
            rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]
