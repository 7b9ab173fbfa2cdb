# school_api/services/user_service.py
from typing import Any, Dict, Optional
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .validators import ensure_unique
from ..core.constants import EntityName, Role
from ..core.security import hash_password
from ..core.unit_of_work import UnitOfWork
from ..models.user import User
from ..schemas.user_schemas import UserCreate, UserUpdate
from ..utils.pagination import PaginationParams

logger = logging.getLogger(__name__)


class UserService(BaseService[User]):
    entity_name = EntityName.USER

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def is_username_available(self, username: str, user_id: Optional[UUID] = None,
                                    uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "username", username, user_id, uow)

    async def is_email_available(self, email: Optional[str], user_id: Optional[UUID] = None,
                                 uow: Optional[UnitOfWork] = None) -> bool:
        return await ensure_unique(self, "email", email, user_id, uow)

    async def get_by_login(self, login: str) -> Optional[User]:
        """Find a live user by username or email"""
        return await self.get_one(or_(User.username == login, User.email == login))

    async def create(self, dto: UserCreate, uow: Optional[UnitOfWork] = None) -> User:
        await self.is_username_available(dto.username, uow=uow)
        await self.is_email_available(dto.email, uow=uow)

        data = dto.model_dump(exclude={"password"})
        data["role"] = dto.role.value
        user = User(**data, password_hash=hash_password(dto.password), is_active=True)
        user = await self.save(user, uow)
        logger.info(f"Created {user.role} user {user.username}")
        return user

    async def update(self, id: UUID, dto: UserUpdate, uow: Optional[UnitOfWork] = None) -> User:
        user = await self.get_one_or_throw(id=id, uow=uow)
        return await self.apply_update(user, dto.model_dump(exclude_unset=True), uow)

    async def apply_update(self, user: User, values: Dict[str, Any], uow: Optional[UnitOfWork] = None) -> User:
        if values.get("username") and values["username"] != user.username:
            await self.is_username_available(values["username"], user.id, uow)
        if values.get("email") and values["email"] != user.email:
            await self.is_email_available(values["email"], user.id, uow)

        password = values.pop("password", None)
        if password:
            values["password_hash"] = hash_password(password)
        return await self.update_fields(user, values, uow)

    async def delete(self, id: UUID, uow: Optional[UnitOfWork] = None) -> None:
        user = await self.get_one_or_throw(id=id, uow=uow)
        await super().delete(user, uow)
        logger.info(f"Deleted user {user.username}")

    async def get_users(self, params: PaginationParams, role: Optional[Role] = None) -> Dict[str, Any]:
        filters = {"role": role.value} if role else {}
        return await self.get_paginated(params, order_by=[User.username.asc()], **filters)

    async def ensure_admin(self, username: str, email: Optional[str], password: str) -> User:
        """Create the bootstrap admin unless a user with that username exists"""
        existing = await self.get_one(username=username)
        if existing:
            return existing
        logger.info(f"Creating bootstrap admin {username}")
        return await self.create(UserCreate(username=username, email=email, password=password, role=Role.ADMIN))
