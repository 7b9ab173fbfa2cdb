# school_api/services/student_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import or_, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from .base_service import BaseService
from .address_service import AddressService
from .user_service import UserService
from ..core.constants import EntityName, Role
from ..core.exceptions import NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..models.address import StudentAddress
from ..models.enrollment import Enrollment
from ..models.parent import Parent
from ..models.student import Student
from ..models.user import User
from ..schemas.student_schemas import StudentCreate, StudentUpdate
from ..schemas.user_schemas import UserCreate
from ..utils.pagination import PaginationParams

logger = logging.getLogger(__name__)


class StudentService(BaseService[Student]):
    entity_name = EntityName.STUDENT

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)
        self.users = UserService(db)
        self.addresses = AddressService(db)

    async def create(self, dto: StudentCreate) -> Student:
        """Create the student, home address and STUDENT login together"""
        async with UnitOfWork(self.db) as uow:
            if dto.parent_id:
                parent = await BaseService(Parent, self.db).get(dto.parent_id, uow)
                if parent is None:
                    raise NotFoundError(EntityName.PARENT, {"id": dto.parent_id})

            student = Student(**dto.model_dump(exclude={"username", "password", "address"}))
            student = await self.save(student, uow)

            if dto.address:
                address = await self.addresses.create(dto.address, uow)
                await self.addresses.link(EntityName.STUDENT, student.id, address.id, uow=uow)

            await self.users.create(
                UserCreate(
                    username=dto.username,
                    email=dto.email,
                    password=dto.password,
                    first_name=dto.first_name,
                    last_name=dto.last_name,
                    role=Role.STUDENT,
                    student_id=student.id,
                ),
                uow,
            )

        logger.info(f"Created student {student.id} ({dto.username})")
        return student

    async def update(self, id: UUID, dto: StudentUpdate) -> Student:
        student = await self.get_one_or_throw(id=id)
        values = dto.model_dump(exclude_unset=True)

        if values.get("parent_id"):
            if await BaseService(Parent, self.db).get(values["parent_id"]) is None:
                raise NotFoundError(EntityName.PARENT, {"id": values["parent_id"]})

        async with UnitOfWork(self.db) as uow:
            # Login email follows the student's email
            if values.get("email") and values["email"] != student.email:
                user = await self.users.get_one(student_id=id, uow=uow)
                if user is None:
                    raise NotFoundError(EntityName.USER, {"student_id": id})
                await self.users.apply_update(user, {"email": values["email"]}, uow)
            await self.update_fields(student, values, uow)

        await self.db.refresh(student)
        return student

    async def delete(self, id: UUID) -> None:
        """Soft-delete the student and login, drop address links and enrollments"""
        from .enrollment_service import EnrollmentService

        student = await self.get_one_or_throw(id=id)

        async with UnitOfWork(self.db) as uow:
            await self.users.delete_where(User.student_id == id, uow=uow)
            await self.addresses.links(StudentAddress).delete_where(StudentAddress.student_id == id, uow=uow)

            await EnrollmentService(self.db).purge(Enrollment.student_id == id, uow=uow)

            await super().delete(student, uow)

        logger.info(f"Deleted student {id}")

    async def get_students(self, params: PaginationParams, q: Optional[str] = None,
                           grade: Optional[str] = None, parent_id: Optional[UUID] = None) -> Dict[str, Any]:
        criteria = []
        if q:
            pattern = f"%{q.lower()}%"
            criteria.append(or_(
                func.lower(Student.first_name).like(pattern),
                func.lower(Student.last_name).like(pattern),
                func.lower(Student.email).like(pattern),
            ))
        if grade:
            criteria.append(Student.grade == grade)
        if parent_id:
            criteria.append(Student.parent_id == parent_id)
        return await self.get_paginated(
            params, *criteria, order_by=[Student.last_name.asc(), Student.first_name.asc()]
        )

    async def get_by_parent(self, parent_id: UUID) -> List[Student]:
        students, _ = await self.find_and_count(parent_id=parent_id, order_by=[Student.first_name.asc()])
        return students
