# school_api/models/semester.py
from sqlalchemy import Column, String, Date, Boolean, Text
from sqlalchemy.orm import relationship
from .base import Base, live_unique_index


class Semester(Base):
    __tablename__ = "semesters"
    __table_args__ = (live_unique_index("uq_semesters_name_live", "name"),)

    name = Column(String(100), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), default="UPCOMING", nullable=False)  # ACTIVE, UPCOMING, COMPLETED
    current_semester = Column(Boolean, default=False, nullable=False)
    academic_year = Column(String(20), nullable=True)  # e.g. "2024-2025"
    description = Column(Text, nullable=True)

    classes = relationship("ClassRoom", back_populates="semester")
