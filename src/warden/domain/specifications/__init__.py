"""Permission filter specifications."""

from warden.domain.specifications.permission_specification import (
    AllOf,
    AnyOf,
    EntitiesGroupIn,
    EntityKeyIs,
    IsGlobal,
    OperationNameIn,
    Specification,
    SubjectIn,
)

__all__ = [
    "AllOf",
    "AnyOf",
    "EntitiesGroupIn",
    "EntityKeyIs",
    "IsGlobal",
    "OperationNameIn",
    "Specification",
    "SubjectIn",
]
