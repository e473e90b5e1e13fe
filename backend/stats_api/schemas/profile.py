from pydantic import BaseModel, Field, field_serializer
from typing import Optional, List, Literal
from datetime import date, datetime


class ProfileUpdate(BaseModel):
    """Partial profile update; only provided fields are written"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    username: Optional[str] = Field(None, min_length=3, max_length=50, pattern=r'^[a-zA-Z0-9_.]+$')
    avatar_url: Optional[str] = None
    gender: Optional[str] = Field(None, max_length=20)
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = Field(None, max_length=100)
    height: Optional[float] = Field(None, gt=0, le=300)
    weight: Optional[float] = Field(None, gt=0, le=500)
    activity_level: Optional[int] = Field(None, ge=1, le=5)
    units_preference: Optional[Literal["metric", "imperial"]] = None
    home_country: Optional[str] = Field(None, max_length=100)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    job_title: Optional[str] = Field(None, max_length=150)
    company: Optional[str] = Field(None, max_length=150)
    industry: Optional[str] = Field(None, max_length=150)
    experience_years: Optional[int] = Field(None, ge=0, le=80)
    annual_income: Optional[float] = Field(None, ge=0)
    savings_rate: Optional[float] = Field(None, ge=0, le=100)
    pinned_module: Optional[Literal["A", "B", "C", "D", "E"]] = None


class ProfileResponse(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    activity_level: Optional[int] = None
    units_preference: str = "metric"
    home_country: Optional[str] = None
    currency: str = "EUR"
    job_title: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    experience_years: Optional[int] = None
    annual_income: Optional[float] = None
    savings_rate: Optional[float] = None
    pinned_module: str = "A"
    onboarding_step: int = 0
    onboarding_completed: bool = False
    harmony_last_analyzed_at: Optional[datetime] = None

    @field_serializer('harmony_last_analyzed_at')
    def serialize_dt(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    class Config:
        from_attributes = True


class PublicProfile(BaseModel):
    """What other users see in search results and friend lists"""
    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class MissingField(BaseModel):
    key: str
    label: str


class ProfileCompleteness(BaseModel):
    is_complete: bool
    physio_complete: bool
    pro_complete: bool
    map_complete: bool
    missing_physio_fields: List[MissingField]
    missing_pro_fields: List[MissingField]
    missing_map_fields: List[MissingField]


class OnboardingUpdate(BaseModel):
    step: int = Field(..., ge=0, le=20)
    completed: bool = False
