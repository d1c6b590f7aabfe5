"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from warden.interfaces.api.resources.health import HealthResource
from warden.interfaces.api.resources.operations import OperationExpandResource
from warden.interfaces.api.resources.permissions import (
    PermissionResolveResource,
    PermissionResource,
)


def create_app(
    resolve_resource: PermissionResolveResource,
    permission_resource: PermissionResource,
    health_resource: HealthResource | None = None,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    health_resource = health_resource or HealthResource()
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/operations/expand", OperationExpandResource())
    app.add_route("/v1/permissions/resolve", resolve_resource)
    app.add_route("/v1/permissions/{permission_id}", permission_resource)
    return app
