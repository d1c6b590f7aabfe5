"""Resource context for scoped resolution."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class ResourceContext:
    """Resolved identity of a target resource."""

    entity_key: UUID
    entities_group_ids: frozenset[UUID] = field(default_factory=frozenset)


@dataclass(frozen=True)
class EntityReference:
    """Resource known only by type name and security key (e.g. from an HTTP request)."""

    entity_type: str
    key: UUID
