from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, func

from app.db.base import Base
from app.db.models.ids import new_id


class RentalHistory(Base):
    __tablename__ = "rental_history"

    id = Column(String(36), primary_key=True, default=new_id)
    rental_id = Column(String(36), nullable=True, index=True)
    room_id = Column(String(36), nullable=False)
    colony_id = Column(String(36), ForeignKey("colonies.id"), nullable=False, index=True)
    room_number = Column(String(50), nullable=False)
    company_name = Column(String(200), nullable=False)
    monthly_rent = Column(Numeric(12, 2), nullable=False)
    first_month_rent = Column(Numeric(12, 2), nullable=False)
    contract_start_date = Column(Date, nullable=False)
    contract_end_date = Column(Date, nullable=False)
    total_paid = Column(Numeric(12, 2), nullable=False)
    total_expected = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )
