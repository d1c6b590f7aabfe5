"""Domain entities."""

from warden.domain.entities.operation import Operation
from warden.domain.entities.permission import Permission

__all__ = [
    "Operation",
    "Permission",
]
