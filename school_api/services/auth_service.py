# school_api/services/auth_service.py
"""Registration, login and token refresh."""
from typing import Any, Dict
from uuid import UUID
import jwt
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from .user_service import UserService
from ..core.config import settings
from ..core.constants import Role
from ..core.exceptions import ForbiddenError, InvalidCredentialsError, UnauthorizedError
from ..core.security import ACCESS_TOKEN, REFRESH_TOKEN, create_token, decode_token, verify_password
from ..models.user import User
from ..schemas.auth_schemas import LoginRequest, RegisterRequest
from ..schemas.user_schemas import UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.users = UserService(db)

    def issue_tokens(self, user: User) -> Dict[str, Any]:
        return {
            "access_token": create_token(str(user.id), user.role, ACCESS_TOKEN),
            "refresh_token": create_token(str(user.id), user.role, REFRESH_TOKEN),
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
        }

    async def register(self, dto: RegisterRequest) -> User:
        """Self sign-up; admin accounts are only created by other admins"""
        if dto.role == Role.ADMIN:
            raise ForbiddenError("Cannot self-register as admin")
        return await self.users.create(UserCreate(**dto.model_dump()))

    async def login(self, dto: LoginRequest) -> Dict[str, Any]:
        user = await self.users.get_by_login(dto.username)
        if user is None or not verify_password(dto.password, user.password_hash):
            logger.warning(f"Failed login for {dto.username}")
            raise InvalidCredentialsError()
        if not user.is_active:
            raise UnauthorizedError("User account is inactive")
        logger.info(f"User {user.username} logged in")
        return self.issue_tokens(user)

    async def refresh(self, refresh_token: str) -> Dict[str, Any]:
        try:
            payload = decode_token(refresh_token)
        except jwt.PyJWTError:
            raise UnauthorizedError("Invalid refresh token")
        if payload.get("type") != REFRESH_TOKEN:
            raise UnauthorizedError("Invalid token type")

        user = await self.users.get(UUID(payload["sub"]))
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or inactive")
        return self.issue_tokens(user)
