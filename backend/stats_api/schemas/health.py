"""
Health data schemas.

Mirrors the server-side validation rules for health records: dates are
YYYY-MM-DD and never in the future, times are HH:MM or HH:MM:SS, and every
numeric field has a plausible range. `user_id` is never accepted from the
client; it comes from the authenticated session.
"""
import re
from datetime import date
from typing import Optional, Literal

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

SleepQuality = Literal["poor", "fair", "good", "excellent"]
SportIntensity = Literal["low", "moderate", "high", "extreme"]

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")


def validate_date_string(value: str) -> str:
    if not isinstance(value, str) or not DATE_RE.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        raise ValueError("Date must be in YYYY-MM-DD format")
    if parsed > date.today():
        raise ValueError("Date cannot be in the future")
    return value


def validate_time_string(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not TIME_RE.match(value):
        raise ValueError("Time must be in HH:MM or HH:MM:SS format")
    return value


class _HealthRecordBase(BaseModel):
    date: str

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str) -> str:
        return validate_date_string(v)


# ============================================
# Sleep
# ============================================

class SleepRecordCreate(_HealthRecordBase):
    duration: int = Field(..., ge=1, le=1440, description="Minutes, at most 24 hours")
    quality: SleepQuality
    deep_sleep_minutes: Optional[int] = Field(None, ge=0, le=720)
    rem_sleep_minutes: Optional[int] = Field(None, ge=0, le=720)
    awakenings: Optional[int] = Field(None, ge=0, le=100)
    bedtime: Optional[str] = None
    wake_time: Optional[str] = None

    @field_validator("bedtime", "wake_time")
    @classmethod
    def check_time(cls, v: Optional[str]) -> Optional[str]:
        return validate_time_string(v)

    @model_validator(mode="after")
    def check_phases_fit_duration(self):
        deep = self.deep_sleep_minutes or 0
        rem = self.rem_sleep_minutes or 0
        if deep + rem > self.duration:
            raise ValueError("Deep sleep + REM sleep cannot exceed total duration")
        return self


class SleepRecordUpdate(BaseModel):
    """All fields optional; the phase check runs against the merged record"""
    date: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1, le=1440)
    quality: Optional[SleepQuality] = None
    deep_sleep_minutes: Optional[int] = Field(None, ge=0, le=720)
    rem_sleep_minutes: Optional[int] = Field(None, ge=0, le=720)
    awakenings: Optional[int] = Field(None, ge=0, le=100)
    bedtime: Optional[str] = None
    wake_time: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v: Optional[str]) -> Optional[str]:
        return validate_date_string(v) if v is not None else v

    @field_validator("bedtime", "wake_time")
    @classmethod
    def check_time(cls, v: Optional[str]) -> Optional[str]:
        return validate_time_string(v)

    @model_validator(mode="after")
    def check_phases_fit_duration(self):
        if self.duration is not None:
            deep = self.deep_sleep_minutes or 0
            rem = self.rem_sleep_minutes or 0
            if deep + rem > self.duration:
                raise ValueError("Deep sleep + REM sleep cannot exceed total duration")
        return self


class SleepRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date
    duration: int
    quality: str
    deep_sleep_minutes: Optional[int] = None
    rem_sleep_minutes: Optional[int] = None
    awakenings: Optional[int] = None
    bedtime: Optional[str] = None
    wake_time: Optional[str] = None


# ============================================
# Sport
# ============================================

class SportSessionCreate(_HealthRecordBase):
    duration: int = Field(..., ge=1, le=1440)
    type: str = Field(..., min_length=1, max_length=50)
    calories_burned: Optional[int] = Field(None, ge=0, le=10000)
    intensity: SportIntensity

    @field_validator("type")
    @classmethod
    def strip_type(cls, v: str) -> str:
        return v.strip()


class SportSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date
    duration: int
    type: str
    calories_burned: Optional[int] = None
    intensity: str


# ============================================
# Body measurements
# ============================================

class BodyMeasurementCreate(_HealthRecordBase):
    weight: Optional[float] = Field(None, ge=20, le=500)
    body_fat_percentage: Optional[float] = Field(None, ge=1, le=70)
    muscle_mass: Optional[float] = Field(None, ge=10, le=200)
    vo2_max: Optional[float] = Field(None, ge=10, le=100)
    resting_heart_rate: Optional[int] = Field(None, ge=30, le=200)


class BodyMeasurementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date
    weight: Optional[float] = None
    body_fat_percentage: Optional[float] = None
    muscle_mass: Optional[float] = None
    vo2_max: Optional[float] = None
    resting_heart_rate: Optional[int] = None


# ============================================
# Nutrition
# ============================================

class NutritionLogCreate(_HealthRecordBase):
    calories: Optional[int] = Field(None, ge=0, le=20000)
    protein: Optional[float] = Field(None, ge=0, le=1000)
    carbs: Optional[float] = Field(None, ge=0, le=2000)
    fat: Optional[float] = Field(None, ge=0, le=1000)
    water_intake: Optional[float] = Field(None, ge=0, le=20, description="Liters")


class NutritionLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date
    calories: Optional[int] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    water_intake: Optional[float] = None


class HealthSummary(BaseModel):
    """Seven-day aggregates shown on the health card"""
    avg_sleep_hours: Optional[float] = None
    total_activity_minutes: int = 0
    avg_water_liters: Optional[float] = None
    sleep_data_days: int = 0
    sport_data_days: int = 0
    has_any_data: bool = False
    has_sleep_data: bool = False
    has_sport_data: bool = False
    has_body_data: bool = False
    has_nutrition_data: bool = False
