"""Registry of per-type entity key extractors."""

import logging
from collections.abc import Callable, Iterable
from uuid import UUID

from warden.application.dto.resource_context import EntityReference
from warden.domain.exceptions import UnsupportedEntityType

logger = logging.getLogger(__name__)

EntityKeyExtractor = Callable[[object], UUID]


class EntityKeyExtractorRegistry:
    """
    Maps resource types to the callable that returns their security key.

    Python classes are looked up through their MRO. EntityReference values
    carry their type as a name, so they are looked up by that name instead.
    """

    def __init__(self) -> None:
        self._extractors: dict[type, EntityKeyExtractor] = {}
        self._named: dict[str, EntityKeyExtractor] = {}

    def register(self, entity_type: type | str, extractor: EntityKeyExtractor) -> None:
        """Register extractor for a class (and its subclasses) or an entity type name."""
        if isinstance(entity_type, str):
            self._named[entity_type] = extractor
            logger.debug("Registered key extractor for entity type %r", entity_type)
            return
        self._extractors[entity_type] = extractor
        logger.debug("Registered key extractor for %s", entity_type.__qualname__)

    def get_extractor(self, entity_type: type | str) -> EntityKeyExtractor | None:
        """Return extractor for the name, or the exact type, else the nearest registered base."""
        if isinstance(entity_type, str):
            return self._named.get(entity_type)
        for klass in entity_type.__mro__:
            extractor = self._extractors.get(klass)
            if extractor is not None:
                return extractor
        return None

    def supports(self, entity_type: type | str) -> bool:
        return self.get_extractor(entity_type) is not None

    def extract_key(self, resource: object) -> UUID:
        """Return the security key of resource. Raises UnsupportedEntityType if unregistered."""
        if isinstance(resource, EntityReference):
            entity_type: type | str = resource.entity_type
        else:
            entity_type = type(resource)
        extractor = self.get_extractor(entity_type)
        if extractor is None:
            raise UnsupportedEntityType(entity_type)
        return extractor(resource)


def default_registry(entity_types: Iterable[str] = ()) -> EntityKeyExtractorRegistry:
    """Registry accepting EntityReference values of the given type names."""
    registry = EntityKeyExtractorRegistry()
    for name in entity_types:
        registry.register(name, lambda ref: ref.key)
    return registry
