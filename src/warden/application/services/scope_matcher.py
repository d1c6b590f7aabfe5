"""Scope matching - which permission scopes apply to a resolution request."""

from warden.application.dto.resource_context import ResourceContext
from warden.application.ports import EntitiesGroupResolver
from warden.application.services.key_extractors import EntityKeyExtractorRegistry
from warden.domain.specifications import (
    EntitiesGroupIn,
    EntityKeyIs,
    IsGlobal,
    Specification,
)
from warden.domain.value_objects import (
    EntitiesGroupScope,
    EntityKeyScope,
    GlobalScope,
    Scope,
)


class ScopeMatcher:
    """
    Decides scope applicability.

    A global request (context None) matches only global permissions. An entity
    request matches global permissions, permissions on the entity key, and
    permissions on any entities group containing the entity. Global rules are
    the fallback everywhere; entity rules only override for their entity.
    """

    def __init__(self, key_extractors: EntityKeyExtractorRegistry) -> None:
        self._key_extractors = key_extractors

    async def context_for(
        self, resource: object, entities_groups: EntitiesGroupResolver
    ) -> ResourceContext:
        """Extract resource key and fetch its entities groups."""
        if isinstance(resource, ResourceContext):
            return resource
        key = self._key_extractors.extract_key(resource)
        group_ids = await entities_groups.resolve(key)
        return ResourceContext(entity_key=key, entities_group_ids=frozenset(group_ids))

    def matches(self, scope: Scope, context: ResourceContext | None) -> bool:
        if isinstance(scope, GlobalScope):
            return True
        if context is None:
            return False
        if isinstance(scope, EntityKeyScope):
            return scope.key == context.entity_key
        if isinstance(scope, EntitiesGroupScope):
            return scope.group_id in context.entities_group_ids
        return False

    def specification(self, context: ResourceContext | None) -> Specification:
        """Same rule as matches(), as a store specification."""
        if context is None:
            return IsGlobal()
        return IsGlobal() | self.entity_specification(context)

    def entity_specification(self, context: ResourceContext) -> Specification:
        """Entity-specific scopes only (no global fallback)."""
        return EntityKeyIs(context.entity_key) | EntitiesGroupIn(context.entities_group_ids)
