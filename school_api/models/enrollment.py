# school_api/models/enrollment.py
from sqlalchemy import Column, String, Date, Text, JSON, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Enrollment(Base):
    __tablename__ = "enrollments"
    # Backstop for the duplicate check done at registration
    __table_args__ = (UniqueConstraint("student_id", "class_id", name="uq_enrollment_student_class"),)

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)

    enrollment_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), default="ACTIVE", nullable=False, index=True)
    # [{"status": ..., "date": ..., "reason": ...}, ...], oldest first
    status_history = Column(JSON, nullable=False, default=list)
    grade = Column(String(10), nullable=True)
    notes = Column(Text, nullable=True)
    completion_date = Column(Date, nullable=True)

    # Relationships
    student = relationship("Student", back_populates="enrollments")
    class_ = relationship("ClassRoom", back_populates="enrollments")
    attendances = relationship("Attendance", back_populates="enrollment", passive_deletes=True)
    grades = relationship("Grade", back_populates="enrollment", passive_deletes=True)
