"""Permissions API resources."""

from uuid import UUID

import falcon.asgi

from warden.application.dto.resource_context import EntityReference
from warden.application.ports import UnitOfWorkFactory
from warden.application.services.permission_resolver import (
    PermissionResolver,
    effective_decision,
)
from warden.domain.entities import Permission
from warden.domain.exceptions import (
    CollaboratorUnavailable,
    InvalidArgument,
    NotFound,
    UnsupportedEntityType,
)
from warden.domain.value_objects import (
    EntitiesGroupScope,
    EntityKeyScope,
    GroupSubject,
    Subject,
    UserSubject,
)


def permission_to_dict(p: Permission) -> dict:
    """Serialize permission for JSON responses."""
    subject = (
        {"user": p.subject.user_id}
        if isinstance(p.subject, UserSubject)
        else {"group": str(p.subject.group_id)}
    )
    if isinstance(p.scope, EntityKeyScope):
        scope = {"type": "entity", "key": str(p.scope.key)}
    elif isinstance(p.scope, EntitiesGroupScope):
        scope = {"type": "entities_group", "id": str(p.scope.group_id)}
    else:
        scope = {"type": "global"}
    return {
        "id": str(p.id),
        "subject": subject,
        "scope": scope,
        "operation": p.operation.name,
        "level": p.level,
        "allow": p.allow,
    }


def _parse_subject(req: falcon.asgi.Request) -> Subject:
    user = req.get_param("user")
    group = req.get_param("group")
    if bool(user) == bool(group):
        raise InvalidArgument("Exactly one of 'user' or 'group' is required")
    if user:
        return UserSubject(user)
    try:
        return GroupSubject(UUID(group))
    except ValueError as e:
        raise InvalidArgument(f"Invalid group id: {group}") from e


def _parse_resource(req: falcon.asgi.Request) -> EntityReference | None:
    entity_type = req.get_param("entity_type")
    entity_key = req.get_param("entity_key")
    if not entity_type and not entity_key:
        return None
    if not entity_type or not entity_key:
        raise InvalidArgument("'entity_type' and 'entity_key' must be given together")
    try:
        return EntityReference(entity_type=entity_type, key=UUID(entity_key))
    except ValueError as e:
        raise InvalidArgument(f"Invalid entity key: {entity_key}") from e


class PermissionResolveResource:
    """GET /v1/permissions/resolve - ordered applicable permissions and decision."""

    def __init__(self, resolver: PermissionResolver) -> None:
        self._resolver = resolver

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Resolve permissions of user or group on operation(s), optionally for an entity."""
        try:
            subject = _parse_subject(req)
            resource = _parse_resource(req)
            operations = req.get_param_as_list("operation") or []
            permissions = await self._resolver.resolve(subject, operations, resource)
        except (InvalidArgument, UnsupportedEntityType) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except CollaboratorUnavailable as e:
            resp.status = falcon.HTTP_503
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "items": [permission_to_dict(p) for p in permissions],
            "allowed": effective_decision(permissions),
        }
        resp.status = falcon.HTTP_200


class PermissionResource:
    """GET /v1/permissions/{permission_id} - single permission record."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        try:
            perm_id = UUID(permission_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid permission ID"}
            return

        try:
            async with self._uow_factory() as uow:
                perm = await uow.permissions.get_by_id(perm_id)
            if perm is None:
                raise NotFound(f"Permission {permission_id} not found")
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except CollaboratorUnavailable as e:
            resp.status = falcon.HTTP_503
            resp.media = {"error": str(e)}
            return

        resp.media = permission_to_dict(perm)
        resp.status = falcon.HTTP_200
