# school_api/models/grade.py
from sqlalchemy import Column, String, Date, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Grade(Base):
    __tablename__ = "grades"

    enrollment_id = Column(Uuid(as_uuid=True), ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True)
    assignment_name = Column(String(100), nullable=False)
    score = Column(Numeric(5, 2), nullable=False)
    grade_date = Column(Date, nullable=False)
    category = Column(String(50), nullable=True)  # homework, quiz, exam...
    weighting = Column(Numeric(5, 2), default=1, nullable=False)

    enrollment = relationship("Enrollment", back_populates="grades")
