"""Permission resolution - applicable records in precedence order."""

import logging
from collections.abc import Iterable
from uuid import UUID

from warden.application.ports import UnitOfWork, UnitOfWorkFactory
from warden.application.services.scope_matcher import ScopeMatcher
from warden.domain.entities import Permission
from warden.domain.specifications import (
    AllOf,
    OperationNameIn,
    Specification,
    SubjectIn,
)
from warden.domain.value_objects import (
    GroupSubject,
    Subject,
    UserSubject,
    as_subject,
    expand_operation_names,
)

logger = logging.getLogger(__name__)


def order_by_precedence(permissions: Iterable[Permission]) -> list[Permission]:
    """
    Sort by level descending, then deny before allow.

    The first element is the effective decision: a more specific rule wins,
    and at equal level a deny wins. Permission id breaks remaining ties so
    the order never depends on how the store returned the rows.
    """
    return sorted(permissions, key=lambda p: p.precedence_key)


def effective_decision(permissions: list[Permission]) -> bool:
    """Allow flag of the first ordered record; False when nothing applies."""
    if not permissions:
        return False
    return permissions[0].allow


class PermissionResolver:
    """Resolves permissions of users and groups on operations and resources."""

    def __init__(
        self, unit_of_work_factory: UnitOfWorkFactory, scope_matcher: ScopeMatcher
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._scope_matcher = scope_matcher

    async def resolve(
        self,
        subject: Subject | str,
        operation_names: str | list[str],
        resource: object | None = None,
    ) -> list[Permission]:
        """
        Permissions of subject on operation_names (and their ancestors).

        With resource None only global-scope records are considered. With a
        resource, global records plus records on the resource key or its
        entities groups. Returns an empty list when nothing applies.
        """
        subject = as_subject(subject)
        names = expand_operation_names(operation_names)

        async with self._uow_factory() as uow:
            subject_spec = await self._subject_specification(uow, subject)
            context = None
            if resource is not None:
                context = await self._scope_matcher.context_for(resource, uow.entities_groups)
            spec = AllOf((
                subject_spec,
                OperationNameIn(tuple(names)),
                self._scope_matcher.specification(context),
            ))
            return await self._find(uow, spec)

    async def for_user(self, user_id: str) -> list[Permission]:
        """Every permission of the user or the user's groups, any operation or scope."""
        subject = as_subject(user_id)
        async with self._uow_factory() as uow:
            spec = AllOf((await self._subject_specification(uow, subject),))
            return await self._find(uow, spec)

    async def for_operations(self, operation_names: str | list[str]) -> list[Permission]:
        """Every permission on the operations (and ancestors), any subject or scope."""
        names = expand_operation_names(operation_names)
        async with self._uow_factory() as uow:
            return await self._find(uow, AllOf((OperationNameIn(tuple(names)),)))

    async def for_group(
        self, group_id: UUID, operation_names: str | list[str]
    ) -> list[Permission]:
        """Permissions written for this users group only (no nesting), any scope."""
        names = expand_operation_names(operation_names)
        spec = AllOf((
            SubjectIn(group_ids=frozenset({group_id})),
            OperationNameIn(tuple(names)),
        ))
        async with self._uow_factory() as uow:
            return await self._find(uow, spec)

    async def for_entity(self, resource: object) -> list[Permission]:
        """Permissions scoped to the resource or its entities groups, any subject."""
        async with self._uow_factory() as uow:
            context = await self._scope_matcher.context_for(resource, uow.entities_groups)
            spec = AllOf((self._scope_matcher.entity_specification(context),))
            return await self._find(uow, spec)

    async def for_user_on_entity(self, user_id: str, resource: object) -> list[Permission]:
        """The user's permissions scoped to the resource or its entities groups."""
        subject = as_subject(user_id)
        async with self._uow_factory() as uow:
            subject_spec = await self._subject_specification(uow, subject)
            context = await self._scope_matcher.context_for(resource, uow.entities_groups)
            spec = AllOf((subject_spec, self._scope_matcher.entity_specification(context)))
            return await self._find(uow, spec)

    async def _subject_specification(self, uow: UnitOfWork, subject: Subject) -> Specification:
        if isinstance(subject, GroupSubject):
            return SubjectIn(group_ids=frozenset({subject.group_id}))
        if isinstance(subject, UserSubject):
            closure = await uow.group_closure.resolve(subject.user_id)
            return SubjectIn(
                user_ids=frozenset({subject.user_id}),
                group_ids=frozenset(closure),
            )
        raise TypeError(f"Unknown subject kind: {type(subject).__name__}")

    async def _find(self, uow: UnitOfWork, spec: Specification) -> list[Permission]:
        candidates = await uow.permissions.query(spec)
        matching = [p for p in candidates if spec.is_satisfied_by(p)]
        if len(matching) != len(candidates):
            logger.warning(
                "Permission store returned %d records outside the filter; ignoring them",
                len(candidates) - len(matching),
            )
        ordered = order_by_precedence(matching)
        logger.debug("Resolved %d permissions for %r", len(ordered), spec)
        return ordered
