# school_api/models/parent.py
from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Parent(Base):
    __tablename__ = "parents"

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False, index=True)
    relationship_to_student = Column(String(20), nullable=True)  # MOTHER, FATHER, OTHER
    contact_number = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True, index=True)
    occupation = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    students = relationship("Student", back_populates="parent")
    emergency_contacts = relationship("EmergencyContact", back_populates="parent", passive_deletes=True)
    addresses = relationship("ParentAddress", back_populates="parent", passive_deletes=True)


class EmergencyContact(Base):
    __tablename__ = "emergency_contacts"

    parent_id = Column(Uuid(as_uuid=True), ForeignKey("parents.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    relationship_to_parent = Column("relationship", String(50), nullable=True)
    phone_number = Column(String(20), nullable=False)
    email = Column(String(100), nullable=True)

    parent = relationship("Parent", back_populates="emergency_contacts")
