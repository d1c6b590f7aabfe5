"""PostgreSQL users-group closure."""

from uuid import UUID

from psycopg import AsyncConnection

from warden.infrastructure.persistence.postgres.errors import translate_driver_errors

# Direct memberships, then every ancestor through users_group.parent_id.
# UNION (not UNION ALL) terminates on cyclic parent chains.
_CLOSURE_SQL = """
WITH RECURSIVE closure(id) AS (
    SELECT m.users_group_id FROM users_group_member m WHERE m.user_id = %s
    UNION
    SELECT g.parent_id FROM users_group g
    JOIN closure c ON g.id = c.id
    WHERE g.parent_id IS NOT NULL
)
SELECT id FROM closure
"""


class PostgresGroupClosureResolver:
    """Transitive users-group membership from users_group_member and users_group."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def resolve(self, user_id: str) -> set[UUID]:
        """Ids of every group the user belongs to, directly or through nesting."""
        async with translate_driver_errors("Group closure lookup"):
            cur = await self._conn.execute(_CLOSURE_SQL, (user_id,))
            rows = await cur.fetchall()
        return {r[0] for r in rows}
