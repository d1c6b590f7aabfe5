"""Fixtures for API tests."""

import pytest

from warden.interfaces.api.app import create_app
from warden.interfaces.api.resources.permissions import (
    PermissionResolveResource,
    PermissionResource,
)


@pytest.fixture
def app(uow_factory, resolver):
    """Falcon ASGI app over the in-memory store."""
    return create_app(
        resolve_resource=PermissionResolveResource(resolver),
        permission_resource=PermissionResource(uow_factory),
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
