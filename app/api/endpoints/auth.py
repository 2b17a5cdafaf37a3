"""Authentication endpoints."""

import logging
from fastapi import APIRouter, HTTPException, Depends

from app.core.deps import get_current_user, get_storage
from app.models.user import User, UserRole
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    UserCreate,
    Token,
    UserOut,
)
from app.services.auth import (
    hash_password,
    authenticate_user,
    create_access_token,
)
from app.storage import Storage, StorageError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserOut, status_code=201)
async def register(user_data: UserRegister, storage: Storage = Depends(get_storage)):
    """Register a new account. Self-registered accounts always start with the lead role."""
    if await storage.get_user_by_username(user_data.username):
        raise HTTPException(status_code=409, detail="Username already registered")

    if await storage.get_user_by_email(user_data.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    try:
        user = await storage.create_user(UserCreate(
            username=user_data.username,
            email=user_data.email,
            password=hash_password(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            role=UserRole.LEAD,
        ))
    except StorageError as e:
        logger.error("Error registering user %s: %s", user_data.username, e)
        raise HTTPException(status_code=400, detail="Failed to register user")

    logger.info("User registered: %s", user.username)
    return user


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, storage: Storage = Depends(get_storage)):
    """Login with username (or email) and password."""
    user = await authenticate_user(storage, credentials.username, credentials.password)

    if not user:
        logger.warning("Failed login for %s", credentials.username)
        raise HTTPException(
            status_code=401,
            detail="Incorrect username or password"
        )

    # Include role in JWT payload
    access_token = create_access_token(data={"sub": str(user.id), "role": user.role})

    logger.info("User logged in: %s (role: %s)", user.username, user.role)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": str(user.id),
        "role": user.role,
    }


@router.get("/me", response_model=UserOut)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return current_user
