from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Literal
from datetime import date

AssetType = Literal[
    "real_estate", "vehicle", "stocks", "bonds", "crypto",
    "etf", "savings", "retirement", "cash", "other",
]
LiabilityType = Literal[
    "mortgage", "car_loan", "student_loan", "personal_loan", "credit_card", "other",
]


class AssetCreate(BaseModel):
    asset_type: AssetType
    name: str = Field(..., min_length=1, max_length=150)
    institution: Optional[str] = Field(None, max_length=150)
    current_value: float = Field(..., ge=0)
    purchase_value: Optional[float] = Field(None, ge=0)
    purchase_date: Optional[date] = None
    currency: str = Field("EUR", min_length=3, max_length=3)
    is_liquid: bool = False


class AssetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    asset_type: str
    name: str
    institution: Optional[str] = None
    current_value: float
    purchase_value: Optional[float] = None
    purchase_date: Optional[date] = None
    currency: str
    is_liquid: bool


class LiabilityCreate(BaseModel):
    liability_type: LiabilityType
    name: str = Field(..., min_length=1, max_length=150)
    original_amount: float = Field(..., ge=0)
    remaining_amount: float = Field(..., ge=0)
    interest_rate: Optional[float] = Field(None, ge=0, le=100)
    monthly_payment: Optional[float] = Field(None, ge=0)
    end_date: Optional[date] = None
    currency: str = Field("EUR", min_length=3, max_length=3)


class LiabilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    liability_type: str
    name: str
    original_amount: float
    remaining_amount: float
    interest_rate: Optional[float] = None
    monthly_payment: Optional[float] = None
    end_date: Optional[date] = None
    currency: str


class FinanceSummary(BaseModel):
    total_assets: float
    total_liabilities: float
    net_worth: float
    liquid_assets: float
    has_any_data: bool
