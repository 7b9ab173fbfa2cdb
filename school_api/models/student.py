# school_api/models/student.py
from sqlalchemy import Column, String, Date, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Student(Base):
    __tablename__ = "students"

    # Basic Information
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False, index=True)
    dob = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)
    contact_number = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True, index=True)

    # Academic Information
    enrollment_date = Column(Date, nullable=True)
    grade = Column(String(20), nullable=True)
    previous_school = Column(String(200), nullable=True)
    academic_year = Column(String(20), nullable=True)
    additional_notes = Column(Text, nullable=True)

    parent_id = Column(Uuid(as_uuid=True), ForeignKey("parents.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    parent = relationship("Parent", back_populates="students")
    enrollments = relationship("Enrollment", back_populates="student", passive_deletes=True)
    addresses = relationship("StudentAddress", back_populates="student", passive_deletes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
