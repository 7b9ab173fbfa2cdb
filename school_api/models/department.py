# school_api/models/department.py
from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base, live_unique_index
from .teacher import teacher_departments


class Department(Base):
    __tablename__ = "departments"
    __table_args__ = (
        live_unique_index("uq_departments_name_live", "name"),
        live_unique_index("uq_departments_code_live", "code"),
    )

    name = Column(String(100), nullable=False, index=True)
    code = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
    phone_number = Column(String(20), nullable=True)

    # Head of department, must be one of the teachers
    head_id = Column(Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    head = relationship("Teacher", foreign_keys=[head_id])
    teachers = relationship("Teacher", secondary=teacher_departments, back_populates="departments")
    courses = relationship("Course", back_populates="department")
