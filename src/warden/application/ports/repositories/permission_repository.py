"""Permission repository port."""

from typing import Protocol
from uuid import UUID

from warden.domain.entities import Permission
from warden.domain.specifications import Specification


class PermissionRepository(Protocol):
    """Port for reading permission records."""

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def query(self, specification: Specification) -> list[Permission]:
        """Return records satisfying specification, in no particular order."""
        ...
