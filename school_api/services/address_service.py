# school_api/services/address_service.py
from typing import List, Optional, Type, Union
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from ..core.constants import EntityName
from ..core.exceptions import BadRequestError, NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.address import Address, StudentAddress, ParentAddress, TeacherAddress
from ..models.parent import Parent
from ..models.student import Student
from ..models.teacher import Teacher
from ..schemas.address_schemas import AddressAssociate, AddressCreate, AddressUpdate

logger = logging.getLogger(__name__)

OwnerLink = Union[StudentAddress, ParentAddress, TeacherAddress]

# owner kind -> (owner model, link model, link column)
OWNERS = {
    EntityName.STUDENT: (Student, StudentAddress, "student_id"),
    EntityName.PARENT: (Parent, ParentAddress, "parent_id"),
    EntityName.TEACHER: (Teacher, TeacherAddress, "teacher_id"),
}


class AddressService(BaseService[Address]):
    entity_name = EntityName.ADDRESS

    def __init__(self, db: AsyncSession):
        super().__init__(Address, db)

    async def create(self, dto: AddressCreate, uow: Optional[UnitOfWork] = None) -> Address:
        return await self.save(Address(**dto.model_dump()), uow)

    async def update(self, id: UUID, dto: AddressUpdate) -> Address:
        address = await self.get_one_or_throw(id=id)
        return await self.update_fields(address, dto.model_dump(exclude_unset=True))

    async def delete(self, id: UUID) -> None:
        address = await self.get_one_or_throw(id=id)
        async with UnitOfWork(self.db) as uow:
            for _, link_model, _ in OWNERS.values():
                await self.links(link_model).delete_where(link_model.address_id == id, uow=uow)
            await super().delete(address, uow)
        logger.info(f"Deleted address {id}")

    def links(self, link_model: Type[OwnerLink]) -> BaseService:
        links = BaseService(link_model, self.db)
        links.entity_name = EntityName.ADDRESS
        return links

    async def link(self, owner: EntityName, owner_id: UUID, address_id: UUID,
                   address_type: str = "HOME", uow: Optional[UnitOfWork] = None) -> OwnerLink:
        _, link_model, column = OWNERS[owner]
        link = link_model(address_id=address_id, address_type=address_type, **{column: owner_id})
        return await self.links(link_model).save(link, uow)

    async def associate(self, address_id: UUID, dto: AddressAssociate) -> OwnerLink:
        """Attach an existing address to one student, parent or teacher"""
        owners = [
            (kind, owner_id)
            for kind, owner_id in (
                (EntityName.STUDENT, dto.student_id),
                (EntityName.PARENT, dto.parent_id),
                (EntityName.TEACHER, dto.teacher_id),
            )
            if owner_id is not None
        ]
        if len(owners) != 1:
            raise BadRequestError(EntityName.ADDRESS, "Exactly one of student_id, parent_id or teacher_id is required")
        kind, owner_id = owners[0]

        await self.get_one_or_throw(id=address_id)
        owner_model, link_model, column = OWNERS[kind]
        owner = await BaseService(owner_model, self.db).get(owner_id)
        if owner is None:
            raise NotFoundError(kind, {"id": owner_id})

        existing = await self.links(link_model).get_one(
            getattr(link_model, column) == owner_id, link_model.address_id == address_id
        )
        if existing:
            raise BadRequestError(EntityName.ADDRESS, "Address already associated")
        return await self.link(kind, owner_id, address_id, dto.address_type)

    async def get_owner_addresses(self, owner: EntityName, owner_id: UUID) -> List[OwnerLink]:
        _, link_model, column = OWNERS[owner]
        stmt = (
            select(link_model)
            .where(getattr(link_model, column) == owner_id, link_model.is_deleted == False)
            .options(selectinload(link_model.address))
        )
        result = await self.db.execute(stmt)
        return [link for link in result.scalars().all() if not link.address.is_deleted]
