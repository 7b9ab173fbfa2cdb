# school_api/models/attendance.py
from sqlalchemy import Column, String, Date, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Attendance(Base):
    __tablename__ = "attendances"

    enrollment_id = Column(Uuid(as_uuid=True), ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True)
    attendance_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False)  # PRESENT, ABSENT, LATE, EXCUSED
    notes = Column(Text, nullable=True)

    enrollment = relationship("Enrollment", back_populates="attendances")
