"""Health tracking records: sleep, sport, body measurements, nutrition"""
from sqlalchemy import Column, String, DateTime, Date, Integer, Float, ForeignKey

from stats_api.core.database import Base
from stats_api.core.types import GUID, generate_uuid, utcnow


class SleepRecord(Base):
    """One night of sleep"""
    __tablename__ = "sleep_records"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # minutes
    quality = Column(String(20), nullable=False)  # poor, fair, good, excellent
    deep_sleep_minutes = Column(Integer, nullable=True)
    rem_sleep_minutes = Column(Integer, nullable=True)
    awakenings = Column(Integer, nullable=True)
    bedtime = Column(String(8), nullable=True)  # HH:MM[:SS]
    wake_time = Column(String(8), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<SleepRecord {self.date} {self.duration}min>"


class SportSession(Base):
    """A single workout"""
    __tablename__ = "sport_sessions"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # minutes
    type = Column(String(50), nullable=False)
    calories_burned = Column(Integer, nullable=True)
    intensity = Column(String(20), nullable=False)  # low, moderate, high, extreme

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<SportSession {self.date} {self.type}>"


class BodyMeasurement(Base):
    __tablename__ = "body_measurements"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    weight = Column(Float, nullable=True)  # kg
    body_fat_percentage = Column(Float, nullable=True)
    muscle_mass = Column(Float, nullable=True)  # kg
    vo2_max = Column(Float, nullable=True)
    resting_heart_rate = Column(Integer, nullable=True)  # bpm

    created_at = Column(DateTime, default=utcnow, nullable=False)


class NutritionLog(Base):
    __tablename__ = "nutrition_logs"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    calories = Column(Integer, nullable=True)
    protein = Column(Float, nullable=True)  # grams
    carbs = Column(Float, nullable=True)  # grams
    fat = Column(Float, nullable=True)  # grams
    water_intake = Column(Float, nullable=True)  # liters

    created_at = Column(DateTime, default=utcnow, nullable=False)
