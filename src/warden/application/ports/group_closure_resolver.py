"""Group closure port - transitive users-group membership."""

from typing import Protocol
from uuid import UUID


class GroupClosureResolver(Protocol):
    """Port returning every users group a user belongs to, directly or through nesting."""

    async def resolve(self, user_id: str) -> set[UUID]: ...
