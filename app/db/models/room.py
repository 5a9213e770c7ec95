from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.db.models.ids import new_id
from app.domain.room import RoomStatus


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=new_id)
    colony_id = Column(String(36), ForeignKey("colonies.id"), nullable=False, index=True)
    room_number = Column(String(50), nullable=False)
    status = Column(String(10), nullable=False, default=RoomStatus.FREE.value)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    colony = relationship("Colony", back_populates="rooms")
    rental = relationship("Rental", back_populates="room", uselist=False)
