"""Domain exceptions."""


class WardenError(Exception):
    """Base exception for Warden."""

    pass


class InvalidArgument(WardenError):
    """Subject or operation names are missing or malformed."""

    pass


class UnsupportedEntityType(WardenError):
    """No key extractor is registered for the resource type."""

    def __init__(self, entity_type: type | str) -> None:
        self.entity_type = entity_type
        name = entity_type if isinstance(entity_type, str) else entity_type.__qualname__
        super().__init__(f"No key extractor registered for {name}")


class CollaboratorUnavailable(WardenError):
    """Permission store or membership resolver failed."""

    pass


class NotFound(WardenError):
    """Requested record was not found."""

    pass
