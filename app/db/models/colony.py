from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.db.models.ids import new_id


class Colony(Base):
    __tablename__ = "colonies"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    rooms = relationship("Room", back_populates="colony")
