# school_api/models/teacher.py
from sqlalchemy import Column, String, Date, Numeric, ForeignKey, Table, Uuid
from sqlalchemy.orm import relationship
from .base import Base

# Many-to-many between teachers and departments
teacher_departments = Table(
    "teacher_departments",
    Base.metadata,
    Column("teacher_id", Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
    Column("department_id", Uuid(as_uuid=True), ForeignKey("departments.id", ondelete="CASCADE"), primary_key=True),
)


class Teacher(Base):
    __tablename__ = "teachers"

    # Basic Information
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False, index=True)
    dob = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)
    contact_number = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True, index=True)

    # Employment
    hire_date = Column(Date, nullable=True)
    salary = Column(Numeric(10, 2), nullable=True)
    title = Column(String(20), nullable=True)  # DR, MR, MS, MRS, PROF
    employment_type = Column(String(20), nullable=True)  # FULL_TIME, PART_TIME, CONTRACT, TEMPORARY

    # Relationships
    departments = relationship("Department", secondary=teacher_departments, back_populates="teachers")
    assignments = relationship("ClassAssignment", back_populates="teacher", passive_deletes=True)
    addresses = relationship("TeacherAddress", back_populates="teacher", passive_deletes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
