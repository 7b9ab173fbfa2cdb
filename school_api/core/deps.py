# school_api/core/deps.py
"""Authentication dependencies shared by the routers."""
from typing import Optional
from uuid import UUID
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import jwt

from .constants import Role
from .database import get_db
from .exceptions import ForbiddenError, UnauthorizedError
from .security import ACCESS_TOKEN, decode_token
from ..models.user import User
from ..services.user_service import UserService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Decode the bearer access token and load its live, active user"""
    if credentials is None:
        raise UnauthorizedError()
    try:
        claims = decode_token(credentials.credentials)
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid token")

    if claims.get("type") != ACCESS_TOKEN:
        raise UnauthorizedError("Invalid token type")

    try:
        user_id = UUID(claims.get("sub", ""))
    except ValueError:
        raise UnauthorizedError("Invalid user ID format")

    user = await UserService(db).get(user_id)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")
    return user


def require_roles(*roles: Role):
    """Dependency factory admitting only users holding one of ``roles``"""
    allowed = {role.value for role in roles}

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise ForbiddenError()
        return user

    return checker


require_admin = require_roles(Role.ADMIN)
