# school_api/services/parent_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .address_service import AddressService
from .student_service import StudentService
from .user_service import UserService
from ..core.constants import EntityName, Role
from ..core.exceptions import BadRequestError
from ..core.unit_of_work import UnitOfWork
from ..models.address import ParentAddress
from ..models.parent import EmergencyContact, Parent
from ..models.student import Student
from ..models.user import User
from ..schemas.parent_schemas import EmergencyContactBase, ParentCreate, ParentUpdate
from ..schemas.user_schemas import UserCreate
from ..utils.pagination import PaginationParams

logger = logging.getLogger(__name__)


class EmergencyContactService(BaseService[EmergencyContact]):
    entity_name = EntityName.PARENT
    soft_delete = False

    def __init__(self, db: AsyncSession):
        super().__init__(EmergencyContact, db)

    async def add(self, parent_id: UUID, dto: EmergencyContactBase, uow: Optional[UnitOfWork] = None) -> EmergencyContact:
        data = dto.model_dump(exclude={"relationship"})
        contact = EmergencyContact(parent_id=parent_id, relationship_to_parent=dto.relationship, **data)
        return await self.save(contact, uow)


class ParentService(BaseService[Parent]):
    entity_name = EntityName.PARENT

    def __init__(self, db: AsyncSession):
        super().__init__(Parent, db)
        self.users = UserService(db)
        self.addresses = AddressService(db)
        self.contacts = EmergencyContactService(db)
        self.students = StudentService(db)

    async def create(self, dto: ParentCreate) -> Parent:
        """Create the parent with address, emergency contacts and optional login"""
        if bool(dto.username) != bool(dto.password):
            raise BadRequestError(EntityName.PARENT, "username and password must be given together")

        async with UnitOfWork(self.db) as uow:
            parent = Parent(**dto.model_dump(exclude={"username", "password", "address", "emergency_contacts"}))
            parent = await self.save(parent, uow)

            if dto.address:
                address = await self.addresses.create(dto.address, uow)
                await self.addresses.link(EntityName.PARENT, parent.id, address.id, uow=uow)

            for contact in dto.emergency_contacts:
                await self.contacts.add(parent.id, contact, uow)

            if dto.username:
                await self.users.create(
                    UserCreate(
                        username=dto.username,
                        email=dto.email,
                        password=dto.password,
                        first_name=dto.first_name,
                        last_name=dto.last_name,
                        role=Role.PARENT,
                        parent_id=parent.id,
                    ),
                    uow,
                )

        logger.info(f"Created parent {parent.id}")
        return await self.get_parent(parent.id)

    async def update(self, id: UUID, dto: ParentUpdate) -> Parent:
        parent = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True, exclude={"emergency_contacts"})

        async with UnitOfWork(self.db) as uow:
            if dto.emergency_contacts is not None:
                # Full replacement
                await self.contacts.delete_where(EmergencyContact.parent_id == id, uow=uow)
                for contact in dto.emergency_contacts:
                    await self.contacts.add(id, contact, uow)

            if values.get("email") and values["email"] != parent.email:
                user = await self.users.get_one(parent_id=id, uow=uow)
                if user is not None:
                    await self.users.apply_update(user, {"email": values["email"]}, uow)
            await self.update_fields(parent, values, uow)

        return await self.get_parent(id)

    async def delete(self, id: UUID) -> None:
        parent = await self.get_one_or_throw(id=id)
        async with UnitOfWork(self.db) as uow:
            await self.users.delete_where(User.parent_id == id, uow=uow)
            await self.addresses.links(ParentAddress).delete_where(ParentAddress.parent_id == id, uow=uow)
            await self.contacts.delete_where(EmergencyContact.parent_id == id, uow=uow)
            await self.students.update_where(Student.parent_id == id, values={"parent_id": None}, uow=uow)
            await super().delete(parent, uow)
        logger.info(f"Deleted parent {id}")

    async def get_parent(self, id: UUID) -> Parent:
        return await self.get_one_or_throw(id=id, relations=["emergency_contacts"])

    async def get_parents(self, params: PaginationParams, q: Optional[str] = None) -> Dict[str, Any]:
        criteria = []
        if q:
            pattern = f"%{q.lower()}%"
            criteria.append(or_(
                func.lower(Parent.first_name).like(pattern),
                func.lower(Parent.last_name).like(pattern),
                func.lower(Parent.email).like(pattern),
            ))
        return await self.get_paginated(params, *criteria, order_by=[Parent.last_name.asc()])

    async def get_children(self, id: UUID) -> List[Student]:
        await self.get_one_or_throw(id=id)
        return await self.students.get_by_parent(id)
