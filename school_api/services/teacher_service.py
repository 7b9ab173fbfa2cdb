# school_api/services/teacher_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import or_, func, select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .address_service import AddressService
from .user_service import UserService
from ..core.constants import EntityName, Role
from ..core.exceptions import NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.address import TeacherAddress
from ..models.class_model import ClassAssignment
from ..models.department import Department
from ..models.teacher import Teacher, teacher_departments
from ..models.user import User
from ..schemas.teacher_schemas import TeacherCreate, TeacherUpdate
from ..schemas.user_schemas import UserCreate
from ..utils.pagination import PaginationParams

logger = logging.getLogger(__name__)


class TeacherService(BaseService[Teacher]):
    entity_name = EntityName.TEACHER

    def __init__(self, db: AsyncSession):
        super().__init__(Teacher, db)
        self.users = UserService(db)
        self.addresses = AddressService(db)

    async def create(self, dto: TeacherCreate) -> Teacher:
        """Create the teacher with a TEACHER login in one transaction"""
        async with UnitOfWork(self.db) as uow:
            teacher = Teacher(**dto.model_dump(exclude={"username", "password", "department_ids", "address"}))
            teacher = await self.save(teacher, uow)

            for department_id in dto.department_ids:
                department = await BaseService(Department, self.db).get(department_id, uow)
                if department is None:
                    raise NotFoundError(EntityName.DEPARTMENT, {"id": department_id})
                await uow.session.execute(
                    teacher_departments.insert().values(teacher_id=teacher.id, department_id=department_id)
                )

            if dto.address:
                address = await self.addresses.create(dto.address, uow)
                await self.addresses.link(EntityName.TEACHER, teacher.id, address.id, uow=uow)

            await self.users.create(
                UserCreate(
                    username=dto.username,
                    email=dto.email,
                    password=dto.password,
                    first_name=dto.first_name,
                    last_name=dto.last_name,
                    role=Role.TEACHER,
                    teacher_id=teacher.id,
                ),
                uow,
            )

        logger.info(f"Created teacher {teacher.id} ({dto.username})")
        return teacher

    async def update(self, id: UUID, dto: TeacherUpdate) -> Teacher:
        teacher = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)

        async with UnitOfWork(self.db) as uow:
            if values.get("email") and values["email"] != teacher.email:
                user = await self.users.get_one(teacher_id=id, uow=uow)
                if user is not None:
                    await self.users.apply_update(user, {"email": values["email"]}, uow)
            await self.update_fields(teacher, values, uow)

        await self.db.refresh(teacher)
        return teacher

    async def delete(self, id: UUID) -> None:
        """Soft-delete the teacher and login, remove department and class links"""
        from .class_service import ClassAssignmentService

        teacher = await self.get_one_or_throw(id=id)
        async with UnitOfWork(self.db) as uow:
            await self.users.delete_where(User.teacher_id == id, uow=uow)
            await self.addresses.links(TeacherAddress).delete_where(TeacherAddress.teacher_id == id, uow=uow)
            await ClassAssignmentService(self.db).delete_where(ClassAssignment.teacher_id == id, uow=uow)
            await uow.session.execute(teacher_departments.delete().where(teacher_departments.c.teacher_id == id))
            await super().delete(teacher, uow)
        logger.info(f"Deleted teacher {id}")

    async def get_teachers(self, params: PaginationParams, q: Optional[str] = None,
                           department_id: Optional[UUID] = None) -> Dict[str, Any]:
        criteria = []
        if q:
            pattern = f"%{q.lower()}%"
            criteria.append(or_(
                func.lower(Teacher.first_name).like(pattern),
                func.lower(Teacher.last_name).like(pattern),
                func.lower(Teacher.email).like(pattern),
            ))
        if department_id:
            criteria.append(Teacher.id.in_(
                select(teacher_departments.c.teacher_id).where(teacher_departments.c.department_id == department_id)
            ))
        return await self.get_paginated(params, *criteria, order_by=[Teacher.last_name.asc()])

    async def get_by_ids(self, ids: List[UUID]) -> List[Teacher]:
        if not ids:
            return []
        teachers, _ = await self.find_and_count(Teacher.id.in_(ids), order_by=[Teacher.last_name.asc()])
        return teachers
