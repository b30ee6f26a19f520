"""
Authentication dependencies for FastAPI.
Provides the current user and role guards.
"""

from dataclasses import dataclass
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.infrastructure.auth.jwt_handler import JWTHandler
from app.domain.models.base import ValidationError
from app.domain.models.user import UserRole


# Security scheme
security = HTTPBearer()

_jwt_handler: Optional[JWTHandler] = None


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    global _jwt_handler
    if _jwt_handler is None:
        _jwt_handler = JWTHandler()
    return _jwt_handler


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from a verified token."""

    user_id: str
    tenant_id: str
    role: str
    email: Optional[str] = None


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> CurrentUser:
    """
    FastAPI dependency to get the authenticated user.

    Raises:
        HTTPException: 401 if authentication fails
    """
    try:
        payload = jwt_handler.verify_token(credentials.credentials)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser(
        user_id=payload["sub"],
        tenant_id=payload["tenant_id"],
        role=payload["role"],
        email=payload.get("email"),
    )


class RoleChecker:
    """Dependency class that admits only the given roles."""

    def __init__(self, roles):
        self.roles = frozenset(role.value if isinstance(role, UserRole) else role for role in roles)

    async def __call__(self, user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
        if user.role not in self.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role {user.role} may not access this resource",
            )
        return user


def require_roles(*roles) -> RoleChecker:
    """Dependency factory for role checking."""
    return RoleChecker(roles)


# Pre-configured guards
require_manager = require_roles(UserRole.MANAGER, UserRole.ADMIN, UserRole.SUPER_ADMIN)
require_admin = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN)
