"""Operation entity - a node in the operation-name hierarchy."""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.value_objects.operation_name import parent_name


@dataclass(frozen=True)
class Operation:
    """Operation identified by a path-like name (e.g. /Company/Edit)."""

    id: UUID
    name: str
    description: str | None = None

    @property
    def parent_name(self) -> str | None:
        return parent_name(self.name)
