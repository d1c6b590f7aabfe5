"""Repository ports."""

from warden.application.ports.repositories.permission_repository import (
    PermissionRepository,
)

__all__ = [
    "PermissionRepository",
]
