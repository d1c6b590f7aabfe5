"""Permission scope - where a permission applies."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class GlobalScope:
    """Applies everywhere: no entity key and no entities group."""


@dataclass(frozen=True)
class EntityKeyScope:
    """Applies to the single entity with this security key."""

    key: UUID


@dataclass(frozen=True)
class EntitiesGroupScope:
    """Applies to every entity in the entities group."""

    group_id: UUID


Scope = GlobalScope | EntityKeyScope | EntitiesGroupScope
