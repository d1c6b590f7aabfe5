"""Entities group port - groups containing a resource."""

from typing import Protocol
from uuid import UUID


class EntitiesGroupResolver(Protocol):
    """Port returning the entities groups that contain the entity with this key."""

    async def resolve(self, entity_key: UUID) -> set[UUID]: ...
