"""Permission entity - allow/deny record for a subject on an operation."""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.entities.operation import Operation
from warden.domain.exceptions import InvalidArgument
from warden.domain.value_objects import (
    EntitiesGroupScope,
    EntityKeyScope,
    GlobalScope,
    GroupSubject,
    Scope,
    Subject,
    UserSubject,
)


@dataclass(frozen=True)
class Permission:
    """Permission - subject is allowed or denied operation within scope, at level."""

    id: UUID
    subject: Subject
    scope: Scope
    operation: Operation
    level: int = 1
    allow: bool = True

    @property
    def precedence_key(self) -> tuple[int, bool, str]:
        """Sort key: higher level first, deny before allow, then id."""
        return (-self.level, self.allow, str(self.id))

    @classmethod
    def from_columns(
        cls,
        *,
        id: UUID,
        operation: Operation,
        level: int,
        allow: bool,
        user_id: str | None = None,
        users_group_id: UUID | None = None,
        entity_security_key: UUID | None = None,
        entities_group_id: UUID | None = None,
    ) -> "Permission":
        """Build from nullable storage columns, enforcing subject and scope invariants."""
        if (user_id is None) == (users_group_id is None):
            raise InvalidArgument(
                f"Permission {id} must have exactly one of user or users group"
            )
        if entity_security_key is not None and entities_group_id is not None:
            raise InvalidArgument(
                f"Permission {id} cannot target both an entity and an entities group"
            )

        subject: Subject = (
            UserSubject(user_id) if user_id is not None else GroupSubject(users_group_id)
        )
        if entity_security_key is not None:
            scope: Scope = EntityKeyScope(entity_security_key)
        elif entities_group_id is not None:
            scope = EntitiesGroupScope(entities_group_id)
        else:
            scope = GlobalScope()
        return cls(
            id=id,
            subject=subject,
            scope=scope,
            operation=operation,
            level=level,
            allow=allow,
        )
