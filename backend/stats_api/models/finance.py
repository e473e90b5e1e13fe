from sqlalchemy import Column, String, Boolean, DateTime, Date, Float, ForeignKey

from stats_api.core.database import Base
from stats_api.core.types import GUID, generate_uuid, utcnow


class Asset(Base):
    """Something the user owns"""
    __tablename__ = "assets"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    asset_type = Column(String(30), nullable=False)
    name = Column(String(150), nullable=False)
    institution = Column(String(150), nullable=True)
    current_value = Column(Float, nullable=False)
    purchase_value = Column(Float, nullable=True)
    purchase_date = Column(Date, nullable=True)
    currency = Column(String(3), default="EUR", nullable=False)
    is_liquid = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Asset {self.asset_type} {self.current_value}>"


class Liability(Base):
    """Something the user owes"""
    __tablename__ = "liabilities"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    liability_type = Column(String(30), nullable=False)
    name = Column(String(150), nullable=False)
    original_amount = Column(Float, nullable=False)
    remaining_amount = Column(Float, nullable=False)
    interest_rate = Column(Float, nullable=True)
    monthly_payment = Column(Float, nullable=True)
    end_date = Column(Date, nullable=True)
    currency = Column(String(3), default="EUR", nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Liability {self.liability_type} {self.remaining_amount}>"
