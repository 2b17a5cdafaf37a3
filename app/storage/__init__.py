"""Storage backends and the factory that picks one at startup."""

import logging

from app.core.config import Settings
from app.core.database import create_engine, create_session_maker, init_models
from app.storage.base import IntegrityViolation, NotFoundError, Storage, StorageError
from app.storage.database import DatabaseStorage
from app.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)

__all__ = [
    "Storage",
    "StorageError",
    "NotFoundError",
    "IntegrityViolation",
    "MemoryStorage",
    "DatabaseStorage",
    "build_storage",
]


async def build_storage(settings: Settings) -> Storage:
    """Return the SQL backend when DATABASE_URL is set, otherwise the in-memory one."""
    if not settings.DATABASE_URL:
        logger.info("DATABASE_URL not set, running with in-memory storage")
        return MemoryStorage()

    engine = create_engine(settings.async_database_url)
    await init_models(engine)
    logger.info("Using database storage (%s)", engine.url.render_as_string(hide_password=True))
    return DatabaseStorage(create_session_maker(engine), engine=engine)
