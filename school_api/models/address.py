# school_api/models/address.py
from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base, live_unique_index


class Address(Base):
    __tablename__ = "addresses"

    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)


class StudentAddress(Base):
    __tablename__ = "student_addresses"
    __table_args__ = (live_unique_index("uq_student_address", "student_id", "address_id"),)

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    address_id = Column(Uuid(as_uuid=True), ForeignKey("addresses.id", ondelete="CASCADE"), nullable=False, index=True)
    address_type = Column(String(20), default="HOME", nullable=False)

    student = relationship("Student", back_populates="addresses")
    address = relationship("Address")


class ParentAddress(Base):
    __tablename__ = "parent_addresses"
    __table_args__ = (live_unique_index("uq_parent_address", "parent_id", "address_id"),)

    parent_id = Column(Uuid(as_uuid=True), ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True)
    address_id = Column(Uuid(as_uuid=True), ForeignKey("addresses.id", ondelete="CASCADE"), nullable=False, index=True)
    address_type = Column(String(20), default="HOME", nullable=False)

    parent = relationship("Parent", back_populates="addresses")
    address = relationship("Address")


class TeacherAddress(Base):
    __tablename__ = "teacher_addresses"
    __table_args__ = (live_unique_index("uq_teacher_address", "teacher_id", "address_id"),)

    teacher_id = Column(Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
    address_id = Column(Uuid(as_uuid=True), ForeignKey("addresses.id", ondelete="CASCADE"), nullable=False, index=True)
    address_type = Column(String(20), default="HOME", nullable=False)

    teacher = relationship("Teacher", back_populates="addresses")
    address = relationship("Address")
