"""Driver error translation for PostgreSQL adapters."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import PoolTimeout

from warden.domain.exceptions import CollaboratorUnavailable

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_driver_errors(what: str) -> AsyncIterator[None]:
    """Re-raise connection-level driver failures as CollaboratorUnavailable."""
    try:
        yield
    except (psycopg.OperationalError, PoolTimeout) as exc:
        logger.warning("%s failed: %s", what, exc)
        raise CollaboratorUnavailable(f"{what} failed: {exc}") from exc
