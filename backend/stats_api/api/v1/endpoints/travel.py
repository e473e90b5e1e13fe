from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from stats_api.core.database import get_db
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.travel import (
    VisitedCountryCreate,
    VisitedCountryResponse,
    TripCreate,
    TripResponse,
    TravelSummary,
)
from stats_api.services.travel_service import travel_service

router = APIRouter()


@router.post("/countries", response_model=VisitedCountryResponse, status_code=status.HTTP_201_CREATED)
async def add_visited_country(
    data: VisitedCountryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Record a visited country (one row per ISO code)"""
    return await travel_service.add_country(db, current_user.id, data)


@router.get("/countries", response_model=List[VisitedCountryResponse])
async def list_visited_countries(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await travel_service.list_countries(db, current_user.id)


@router.delete("/countries/{country_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_visited_country(
    country_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await travel_service.delete_country(db, current_user.id, country_id)


@router.post("/trips", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def add_trip(
    data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await travel_service.add_trip(db, current_user.id, data)


@router.get("/trips", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await travel_service.list_trips(db, current_user.id)


@router.delete("/trips/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await travel_service.delete_trip(db, current_user.id, trip_id)


@router.get("/summary", response_model=TravelSummary)
async def get_travel_summary(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await travel_service.get_summary(db, current_user.id)
