"""Application entry point and composition root."""

import logging

import falcon

from warden import __version__
from warden.application.services.key_extractors import default_registry
from warden.application.services.permission_resolver import PermissionResolver
from warden.application.services.scope_matcher import ScopeMatcher
from warden.config import get_settings
from warden.infrastructure.persistence.postgres.connection import create_pool
from warden.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from warden.interfaces.api.app import create_app
from warden.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from warden.interfaces.api.resources.health import HealthResource
from warden.interfaces.api.resources.permissions import (
    PermissionResolveResource,
    PermissionResource,
)
from warden.logging_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"Warden v{__version__}")


def create_warden_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.debug)

    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    resolver = PermissionResolver(
        unit_of_work_factory=uow_factory,
        scope_matcher=ScopeMatcher(default_registry(settings.entity_types)),
    )

    app = create_app(
        resolve_resource=PermissionResolveResource(resolver),
        permission_resource=PermissionResource(uow_factory),
        health_resource=HealthResource(),
        middleware=[PoolLifespanMiddleware(pool)],
    )

    async def log_exception(req, resp, ex, params):
        logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    logger.info("Warden v%s configured (%s)", __version__, settings.environment)
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_warden_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
