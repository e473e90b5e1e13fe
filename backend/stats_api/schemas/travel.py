from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, Literal
from datetime import date

TripPurpose = Literal["leisure", "work", "family", "education", "medical", "other"]
Transport = Literal[
    "plane", "train", "car", "bus", "boat", "motorcycle", "bicycle", "walking", "other",
]


class VisitedCountryCreate(BaseModel):
    country_code: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2")
    country_name: str = Field(..., min_length=1, max_length=100)
    first_visit: Optional[date] = None
    last_visit: Optional[date] = None
    total_days_spent: int = Field(0, ge=0)
    visit_count: int = Field(1, ge=0)
    is_home_country: bool = False

    @field_validator("country_code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()


class VisitedCountryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    country_code: str
    country_name: str
    first_visit: Optional[date] = None
    last_visit: Optional[date] = None
    total_days_spent: int
    visit_count: int
    is_home_country: bool


class TripCreate(BaseModel):
    destination_country: str = Field(..., min_length=1, max_length=100)
    destination_city: Optional[str] = Field(None, max_length=100)
    start_date: date
    end_date: Optional[date] = None
    duration: Optional[int] = Field(None, ge=0)
    purpose: TripPurpose = "leisure"
    transport: Optional[Transport] = None
    distance_km: Optional[float] = Field(None, ge=0)


class TripResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    destination_country: str
    destination_city: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    duration: Optional[int] = None
    purpose: str
    transport: Optional[str] = None
    distance_km: Optional[float] = None


class TravelSummary(BaseModel):
    total_countries_visited: int
    total_trips: int
    total_distance_km: float
    has_any_data: bool
