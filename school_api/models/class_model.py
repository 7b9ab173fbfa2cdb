# school_api/models/class_model.py
from sqlalchemy import Column, String, Integer, Date, Time, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class ClassRoom(Base):
    __tablename__ = "classes"

    course_id = Column(Uuid(as_uuid=True), ForeignKey("courses.id", ondelete="SET NULL"), nullable=True, index=True)
    semester_id = Column(Uuid(as_uuid=True), ForeignKey("semesters.id"), nullable=False, index=True)
    room_id = Column(Uuid(as_uuid=True), ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True)

    # Class details
    name = Column(String(100), nullable=False)
    grade_level = Column(String(20), nullable=True)
    section = Column(String(10), nullable=True)
    description = Column(Text, nullable=True)
    max_enrollment = Column(Integer, default=30, nullable=False)
    status = Column(String(20), default="ACTIVE", nullable=False)

    # Schedule
    day_of_week = Column(String(10), nullable=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    # Relationships
    course = relationship("Course", back_populates="classes")
    semester = relationship("Semester", back_populates="classes")
    room = relationship("Room", back_populates="classes")
    enrollments = relationship("Enrollment", back_populates="class_", passive_deletes=True)
    assignments = relationship("ClassAssignment", back_populates="class_", passive_deletes=True)


class ClassAssignment(Base):
    """Teacher assigned to teach a class."""
    __tablename__ = "class_assignments"
    __table_args__ = (UniqueConstraint("class_id", "teacher_id", name="uq_class_assignment"),)

    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    class_ = relationship("ClassRoom", back_populates="assignments")
    teacher = relationship("Teacher", back_populates="assignments")
