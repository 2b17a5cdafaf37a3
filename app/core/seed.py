"""Seed default accounts on app startup."""

import logging

from app.core.config import settings
from app.models.user import UserRole
from app.schemas.auth import UserCreate
from app.services.auth import hash_password
from app.storage import Storage, StorageError

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {
        "username": "admin",
        "email": "admin@example.com",
        "first_name": "Admin",
        "last_name": "User",
        "role": UserRole.ADMIN,
    },
    {
        "username": "investor",
        "email": "investor@example.com",
        "first_name": "John",
        "last_name": "Investor",
        "role": UserRole.INVESTOR,
    },
]


async def seed_default_users(storage: Storage) -> int:
    """Create the default admin and investor accounts if they don't exist.

    Returns the number of accounts created.
    """
    created = 0
    for account in DEFAULT_USERS:
        if await storage.get_user_by_username(account["username"]):
            logger.info("Default account already exists: %s", account["username"])
            continue
        try:
            await storage.create_user(
                UserCreate(password=hash_password(settings.DEFAULT_ADMIN_PASSWORD), **account)
            )
            created += 1
        except StorageError as e:
            logger.error("Failed to seed default account %s: %s", account["username"], e)

    if created:
        logger.info("Seeded %d default account(s)", created)
    return created
