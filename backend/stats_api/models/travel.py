from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, Float, ForeignKey, UniqueConstraint

from stats_api.core.database import Base
from stats_api.core.types import GUID, generate_uuid, utcnow


class VisitedCountry(Base):
    __tablename__ = "visited_countries"
    __table_args__ = (
        UniqueConstraint("user_id", "country_code", name="uq_visited_countries_user_code"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    country_code = Column(String(2), nullable=False)  # ISO 3166-1 alpha-2
    country_name = Column(String(100), nullable=False)
    first_visit = Column(Date, nullable=True)
    last_visit = Column(Date, nullable=True)
    total_days_spent = Column(Integer, default=0, nullable=False)
    visit_count = Column(Integer, default=1, nullable=False)
    is_home_country = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<VisitedCountry {self.country_code}>"


class Trip(Base):
    __tablename__ = "trips"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    destination_country = Column(String(100), nullable=False)
    destination_city = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    duration = Column(Integer, nullable=True)  # days
    purpose = Column(String(20), default="leisure", nullable=False)
    transport = Column(String(20), nullable=True)
    distance_km = Column(Float, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Trip {self.destination_country} {self.start_date}>"
