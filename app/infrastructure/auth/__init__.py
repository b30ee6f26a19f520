"""
Authentication infrastructure module.
Handles JWT validation and role-based authorization.
"""

from .jwt_handler import JWTHandler
from .dependencies import (
    CurrentUser,
    get_current_user,
    get_jwt_handler,
    require_roles,
    require_manager,
    require_admin,
)

__all__ = [
    "JWTHandler",
    "CurrentUser",
    "get_current_user",
    "get_jwt_handler",
    "require_roles",
    "require_manager",
    "require_admin",
]
