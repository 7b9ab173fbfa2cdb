# school_api/models/user.py
from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base, live_unique_index


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        live_unique_index("uq_users_username_live", "username"),
        live_unique_index("uq_users_email_live", "email"),
    )

    # Login
    username = Column(String(50), nullable=False, index=True)
    email = Column(String(100), nullable=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    photo_url = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, index=True)  # ADMIN, TEACHER, STUDENT, PARENT
    is_active = Column(Boolean, default=True, nullable=False)

    # Profile links, at most one is set depending on role
    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id", ondelete="SET NULL"), nullable=True, index=True)
    teacher_id = Column(Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True, index=True)
    parent_id = Column(Uuid(as_uuid=True), ForeignKey("parents.id", ondelete="SET NULL"), nullable=True, index=True)

    student = relationship("Student", foreign_keys=[student_id])
    teacher = relationship("Teacher", foreign_keys=[teacher_id])
    parent = relationship("Parent", foreign_keys=[parent_id])
