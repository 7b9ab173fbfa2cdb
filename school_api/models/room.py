# school_api/models/room.py
from sqlalchemy import Column, String, Integer, Boolean, Text
from sqlalchemy.orm import relationship
from .base import Base


class Room(Base):
    __tablename__ = "rooms"

    room_number = Column(String(20), nullable=False, unique=True)
    building = Column(String(100), nullable=True)
    name = Column(String(100), nullable=True)
    capacity = Column(Integer, nullable=False)
    room_type = Column(String(20), default="CLASS_ROOM", nullable=False)
    has_projector = Column(Boolean, default=False, nullable=False)
    has_whiteboard = Column(Boolean, default=True, nullable=False)
    status = Column(String(20), default="ACTIVE", nullable=False)
    notes = Column(Text, nullable=True)

    classes = relationship("ClassRoom", back_populates="room")
