"""
Health data endpoints: sleep, sport, body measurements, nutrition.

All records belong to the authenticated user; the user id is never read
from the request body.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from stats_api.core.database import get_db
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.health import (
    SleepRecordCreate,
    SleepRecordUpdate,
    SleepRecordResponse,
    SportSessionCreate,
    SportSessionResponse,
    BodyMeasurementCreate,
    BodyMeasurementResponse,
    NutritionLogCreate,
    NutritionLogResponse,
    HealthSummary,
)
from stats_api.services.health_service import health_service, DEFAULT_LIST_LIMIT

router = APIRouter()


# ==================== SLEEP ====================

@router.post("/sleep", response_model=SleepRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_sleep_record(
    data: SleepRecordCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.create_sleep(db, current_user.id, data)


@router.get("/sleep", response_model=List[SleepRecordResponse])
async def list_sleep_records(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.list_sleep(db, current_user.id, limit)


@router.patch("/sleep/{record_id}", response_model=SleepRecordResponse)
async def update_sleep_record(
    record_id: str,
    data: SleepRecordUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update one of the caller's sleep records"""
    return await health_service.update_sleep(db, current_user.id, record_id, data)


@router.delete("/sleep/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sleep_record(
    record_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await health_service.delete_sleep(db, current_user.id, record_id)


# ==================== SPORT ====================

@router.post("/sport", response_model=SportSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_sport_session(
    data: SportSessionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.create_sport(db, current_user.id, data)


@router.get("/sport", response_model=List[SportSessionResponse])
async def list_sport_sessions(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.list_sport(db, current_user.id, limit)


# ==================== BODY ====================

@router.post("/body", response_model=BodyMeasurementResponse, status_code=status.HTTP_201_CREATED)
async def create_body_measurement(
    data: BodyMeasurementCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.create_body(db, current_user.id, data)


@router.get("/body", response_model=List[BodyMeasurementResponse])
async def list_body_measurements(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.list_body(db, current_user.id, limit)


# ==================== NUTRITION ====================

@router.post("/nutrition", response_model=NutritionLogResponse, status_code=status.HTTP_201_CREATED)
async def create_nutrition_log(
    data: NutritionLogCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.create_nutrition(db, current_user.id, data)


@router.get("/nutrition", response_model=List[NutritionLogResponse])
async def list_nutrition_logs(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await health_service.list_nutrition(db, current_user.id, limit)


# ==================== SUMMARY ====================

@router.get("/summary", response_model=HealthSummary)
async def get_health_summary(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Seven-day aggregates for the health card"""
    return await health_service.get_summary(db, current_user.id)
