"""PostgreSQL entities-group membership."""

from uuid import UUID

from psycopg import AsyncConnection

from warden.infrastructure.persistence.postgres.errors import translate_driver_errors


class PostgresEntitiesGroupResolver:
    """Entities groups containing an entity, from entities_group_member."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def resolve(self, entity_key: UUID) -> set[UUID]:
        async with translate_driver_errors("Entities group lookup"):
            cur = await self._conn.execute(
                "SELECT entities_group_id FROM entities_group_member WHERE entity_security_key = %s",
                (entity_key,),
            )
            rows = await cur.fetchall()
        return {r[0] for r in rows}
