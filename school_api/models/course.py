# school_api/models/course.py
from sqlalchemy import Column, String, Integer, Boolean, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Course(Base):
    __tablename__ = "courses"

    # Hard-deleted, so plain unique constraints
    name = Column(String(100), nullable=False, unique=True)
    code = Column(String(20), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    department_id = Column(Uuid(as_uuid=True), ForeignKey("departments.id"), nullable=False, index=True)

    credits = Column(Integer, default=3, nullable=False)
    required = Column(Boolean, default=False, nullable=False)
    level = Column(Integer, nullable=True)
    status = Column(String(20), default="ACTIVE", nullable=False)  # ACTIVE, INACTIVE, ARCHIVED
    max_students = Column(Integer, nullable=True)

    # Relationships
    department = relationship("Department", back_populates="courses")
    classes = relationship("ClassRoom", back_populates="course")
    prerequisites = relationship(
        "CoursePrerequisite",
        foreign_keys="CoursePrerequisite.course_id",
        back_populates="course",
        passive_deletes=True,
    )


class CoursePrerequisite(Base):
    __tablename__ = "course_prerequisites"
    __table_args__ = (UniqueConstraint("course_id", "prerequisite_id", name="uq_course_prerequisite"),)

    course_id = Column(Uuid(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    prerequisite_id = Column(Uuid(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    min_grade = Column(String(10), nullable=True)  # LetterGrade value, e.g. "C"
    is_required = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)

    course = relationship("Course", foreign_keys=[course_id], back_populates="prerequisites")
    prerequisite = relationship("Course", foreign_keys=[prerequisite_id])
