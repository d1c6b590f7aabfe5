"""Application ports - interfaces for external adapters."""

from warden.application.ports.entities_group_resolver import EntitiesGroupResolver
from warden.application.ports.group_closure_resolver import GroupClosureResolver
from warden.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "EntitiesGroupResolver",
    "GroupClosureResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
