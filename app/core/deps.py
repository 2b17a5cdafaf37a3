"""FastAPI dependencies for storage access, authentication and authorization."""

from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.models.user import User, UserRole
from app.services.auth import decode_access_token
from app.storage import Storage

security = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    """Return the storage backend owned by the running application."""
    return request.app.state.storage


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: Storage = Depends(get_storage),
) -> Optional[User]:
    """Caller's account when a valid bearer token is sent, else None.

    For public endpoints that behave a little differently for logged-in users.
    """
    if not credentials:
        return None

    claims = decode_access_token(credentials.credentials)
    if not claims or not claims.get("sub"):
        return None

    return await storage.get_user(claims["sub"])


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: Storage = Depends(get_storage),
) -> User:
    """Caller's account; 401 for a missing, invalid or orphaned token."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    claims = decode_access_token(credentials.credentials)
    if not claims:
        raise _unauthorized("Could not validate credentials")

    user_id = claims.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token payload")

    user = await storage.get_user(user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user


def require_role(*roles: str):
    """Dependency factory: 403 unless the caller holds one of `roles`.

        @router.put("/{id}")
        async def revalue(admin: User = Depends(require_admin)):
            ...
    """
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {', '.join(roles)}"
            )
        return current_user

    return role_checker


require_admin = require_role(UserRole.ADMIN.value)
