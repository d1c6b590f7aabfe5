"""Domain value objects."""

from warden.domain.value_objects.operation_name import (
    ancestors_of,
    expand_operation_names,
    parent_name,
)
from warden.domain.value_objects.scope import (
    EntitiesGroupScope,
    EntityKeyScope,
    GlobalScope,
    Scope,
)
from warden.domain.value_objects.subject import (
    GroupSubject,
    Subject,
    UserSubject,
    as_subject,
)

__all__ = [
    "EntitiesGroupScope",
    "EntityKeyScope",
    "GlobalScope",
    "GroupSubject",
    "Scope",
    "Subject",
    "UserSubject",
    "ancestors_of",
    "as_subject",
    "expand_operation_names",
    "parent_name",
]
