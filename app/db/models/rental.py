from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.db.models.ids import new_id


class Rental(Base):
    __tablename__ = "rentals"

    id = Column(String(36), primary_key=True, default=new_id)
    room_id = Column(
        String(36), ForeignKey("rooms.id"), nullable=False, unique=True, index=True
    )
    company_name = Column(String(200), nullable=False)
    monthly_rent = Column(Numeric(12, 2), nullable=False)
    contract_start_date = Column(Date, nullable=False)
    first_month_rent = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    room = relationship("Room", back_populates="rental")
