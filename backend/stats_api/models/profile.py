from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, Float, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from stats_api.core.database import Base
from stats_api.core.types import GUID, utcnow


class Profile(Base):
    """
    Per-user profile row.

    Besides identity, physiology, career and preference fields it holds the
    harmony analysis cache: the content hash of the last analyzed snapshot,
    the validated analysis, and when it was produced.
    """
    __tablename__ = "profiles"

    # One-to-one with users: the profile id IS the user id
    id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    # Identity
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    username = Column(String(50), unique=True, index=True, nullable=True)
    avatar_url = Column(Text, nullable=True)

    # Physiology
    gender = Column(String(20), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    nationality = Column(String(100), nullable=True)
    height = Column(Float, nullable=True)  # cm
    weight = Column(Float, nullable=True)  # kg
    activity_level = Column(Integer, nullable=True)
    units_preference = Column(String(20), default="metric", nullable=False)

    # World
    home_country = Column(String(100), nullable=True)

    # Career & finance
    currency = Column(String(3), default="EUR", nullable=False)
    job_title = Column(String(150), nullable=True)
    company = Column(String(150), nullable=True)
    industry = Column(String(150), nullable=True)
    experience_years = Column(Integer, nullable=True)
    annual_income = Column(Float, nullable=True)
    savings_rate = Column(Float, nullable=True)

    # Dashboard preferences
    pinned_module = Column(String(1), default="A", nullable=False)
    onboarding_step = Column(Integer, default=0, nullable=False)
    onboarding_completed = Column(Boolean, default=False, nullable=False)

    # Harmony analysis cache
    harmony_data_hash = Column(String(64), nullable=True)
    harmony_analysis_cache = Column(JSON, nullable=True)
    harmony_last_analyzed_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="profile")

    @property
    def display_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.username or "Utilisateur"

    def __repr__(self):
        return f"<Profile {self.id} @{self.username}>"
