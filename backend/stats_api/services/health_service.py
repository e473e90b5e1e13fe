"""
Health Service - sleep, sport, body and nutrition records plus weekly summary
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Type
import uuid

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.core.exceptions import ResourceNotFoundError, ValidationError
from stats_api.core.logging_config import logger
from stats_api.models.health import SleepRecord, SportSession, BodyMeasurement, NutritionLog
from stats_api.schemas.health import (
    SleepRecordCreate,
    SleepRecordUpdate,
    SportSessionCreate,
    BodyMeasurementCreate,
    NutritionLogCreate,
)

SUMMARY_WINDOW_DAYS = 7
DEFAULT_LIST_LIMIT = 30


def _as_row_values(data) -> Dict[str, Any]:
    values = data.model_dump(exclude_unset=True)
    if isinstance(values.get("date"), str):
        values["date"] = date.fromisoformat(values["date"])
    return values


class HealthService:
    """Service for health tracking records; every query is scoped to the owner"""

    async def _create(self, db: AsyncSession, model: Type, user_id: str, data) -> Any:
        record = model(user_id=user_id, **_as_row_values(data))
        db.add(record)
        await db.commit()
        await db.refresh(record)
        logger.info(f"Created {model.__name__} for user {user_id}")
        return record

    async def _list(self, db: AsyncSession, model: Type, user_id: str, limit: int) -> List[Any]:
        result = await db.execute(
            select(model)
            .where(model.user_id == user_id)
            .order_by(model.date.desc(), model.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ==================== SLEEP ====================

    async def create_sleep(self, db: AsyncSession, user_id: str, data: SleepRecordCreate) -> SleepRecord:
        return await self._create(db, SleepRecord, user_id, data)

    async def list_sleep(self, db: AsyncSession, user_id: str, limit: int = DEFAULT_LIST_LIMIT) -> List[SleepRecord]:
        return await self._list(db, SleepRecord, user_id, limit)

    async def get_own_sleep(self, db: AsyncSession, user_id: str, record_id: str) -> SleepRecord:
        """Fetch a sleep record owned by user_id; malformed ids are 422, other users' records 404"""
        try:
            uuid.UUID(record_id)
        except ValueError:
            raise ValidationError("Invalid record ID", field="id", field_errors={"id": ["Invalid record ID"]})

        result = await db.execute(
            select(SleepRecord).where(SleepRecord.id == record_id, SleepRecord.user_id == user_id)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise ResourceNotFoundError("SleepRecord", record_id)
        return record

    async def update_sleep(
        self, db: AsyncSession, user_id: str, record_id: str, data: SleepRecordUpdate
    ) -> SleepRecord:
        record = await self.get_own_sleep(db, user_id, record_id)
        changes = _as_row_values(data)

        # Phase check against the record as it will be stored
        duration = changes.get("duration", record.duration)
        deep = changes.get("deep_sleep_minutes", record.deep_sleep_minutes) or 0
        rem = changes.get("rem_sleep_minutes", record.rem_sleep_minutes) or 0
        if deep + rem > duration:
            message = "Deep sleep + REM sleep cannot exceed total duration"
            raise ValidationError(message, field="deep_sleep_minutes",
                                  field_errors={"deep_sleep_minutes": [message]})

        for field, value in changes.items():
            setattr(record, field, value)
        await db.commit()
        await db.refresh(record)
        return record

    async def delete_sleep(self, db: AsyncSession, user_id: str, record_id: str) -> None:
        record = await self.get_own_sleep(db, user_id, record_id)
        await db.delete(record)
        await db.commit()
        logger.info(f"Deleted SleepRecord {record_id} for user {user_id}")

    # ==================== SPORT / BODY / NUTRITION ====================

    async def create_sport(self, db: AsyncSession, user_id: str, data: SportSessionCreate) -> SportSession:
        return await self._create(db, SportSession, user_id, data)

    async def list_sport(self, db: AsyncSession, user_id: str, limit: int = DEFAULT_LIST_LIMIT) -> List[SportSession]:
        return await self._list(db, SportSession, user_id, limit)

    async def create_body(self, db: AsyncSession, user_id: str, data: BodyMeasurementCreate) -> BodyMeasurement:
        return await self._create(db, BodyMeasurement, user_id, data)

    async def list_body(self, db: AsyncSession, user_id: str, limit: int = DEFAULT_LIST_LIMIT) -> List[BodyMeasurement]:
        return await self._list(db, BodyMeasurement, user_id, limit)

    async def create_nutrition(self, db: AsyncSession, user_id: str, data: NutritionLogCreate) -> NutritionLog:
        return await self._create(db, NutritionLog, user_id, data)

    async def list_nutrition(self, db: AsyncSession, user_id: str, limit: int = DEFAULT_LIST_LIMIT) -> List[NutritionLog]:
        return await self._list(db, NutritionLog, user_id, limit)

    # ==================== SUMMARY ====================

    async def _has_rows(self, db: AsyncSession, model: Type, user_id: str) -> bool:
        result = await db.execute(select(func.count(model.id)).where(model.user_id == user_id))
        return (result.scalar() or 0) > 0

    async def get_summary(self, db: AsyncSession, user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Seven-day aggregates: average sleep hours, total activity minutes,
        average water intake, number of sleep/sport entries, has-data flags.
        """
        today = today or date.today()
        since = today - timedelta(days=SUMMARY_WINDOW_DAYS)

        sleep_rows = (await db.execute(
            select(SleepRecord.duration).where(SleepRecord.user_id == user_id, SleepRecord.date >= since)
        )).scalars().all()
        sport_rows = (await db.execute(
            select(SportSession.duration).where(SportSession.user_id == user_id, SportSession.date >= since)
        )).scalars().all()
        water_rows = (await db.execute(
            select(NutritionLog.water_intake).where(NutritionLog.user_id == user_id, NutritionLog.date >= since)
        )).scalars().all()

        avg_sleep = sum(sleep_rows) / len(sleep_rows) / 60 if sleep_rows else None
        avg_water = sum(w or 0 for w in water_rows) / len(water_rows) if water_rows else None

        has_sleep = await self._has_rows(db, SleepRecord, user_id)
        has_sport = await self._has_rows(db, SportSession, user_id)
        has_body = await self._has_rows(db, BodyMeasurement, user_id)
        has_nutrition = await self._has_rows(db, NutritionLog, user_id)

        return {
            "avg_sleep_hours": round(avg_sleep, 2) if avg_sleep is not None else None,
            "total_activity_minutes": sum(sport_rows),
            "avg_water_liters": round(avg_water, 2) if avg_water is not None else None,
            "sleep_data_days": len(sleep_rows),
            "sport_data_days": len(sport_rows),
            "has_any_data": has_sleep or has_sport or has_body or has_nutrition,
            "has_sleep_data": has_sleep,
            "has_sport_data": has_sport,
            "has_body_data": has_body,
            "has_nutrition_data": has_nutrition,
        }


# Singleton instance
health_service = HealthService()
