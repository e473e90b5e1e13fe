"""
Travel Service - visited countries and trips
"""

from typing import Any, Dict, List

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.core.exceptions import ConflictError, ResourceNotFoundError
from stats_api.models.travel import VisitedCountry, Trip
from stats_api.schemas.travel import VisitedCountryCreate, TripCreate

TRIP_LIST_LIMIT = 50


class TravelService:

    async def add_country(self, db: AsyncSession, user_id: str, data: VisitedCountryCreate) -> VisitedCountry:
        existing = await db.execute(
            select(VisitedCountry.id).where(
                VisitedCountry.user_id == user_id,
                VisitedCountry.country_code == data.country_code,
            )
        )
        if existing.first() is not None:
            raise ConflictError(f"Country {data.country_code} already recorded", code="COUNTRY_EXISTS")

        country = VisitedCountry(user_id=user_id, **data.model_dump())
        db.add(country)
        await db.commit()
        await db.refresh(country)
        return country

    async def list_countries(self, db: AsyncSession, user_id: str) -> List[VisitedCountry]:
        result = await db.execute(
            select(VisitedCountry)
            .where(VisitedCountry.user_id == user_id)
            .order_by(VisitedCountry.last_visit.desc(), VisitedCountry.country_name)
        )
        return list(result.scalars().all())

    async def count_countries(self, db: AsyncSession, user_id: str) -> int:
        result = await db.execute(
            select(func.count(VisitedCountry.id)).where(VisitedCountry.user_id == user_id)
        )
        return result.scalar() or 0

    async def delete_country(self, db: AsyncSession, user_id: str, country_id: str) -> None:
        result = await db.execute(
            delete(VisitedCountry).where(VisitedCountry.id == country_id, VisitedCountry.user_id == user_id)
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError("VisitedCountry", country_id)
        await db.commit()

    async def add_trip(self, db: AsyncSession, user_id: str, data: TripCreate) -> Trip:
        trip = Trip(user_id=user_id, **data.model_dump())
        db.add(trip)
        await db.commit()
        await db.refresh(trip)
        return trip

    async def list_trips(self, db: AsyncSession, user_id: str) -> List[Trip]:
        result = await db.execute(
            select(Trip)
            .where(Trip.user_id == user_id)
            .order_by(Trip.start_date.desc())
            .limit(TRIP_LIST_LIMIT)
        )
        return list(result.scalars().all())

    async def delete_trip(self, db: AsyncSession, user_id: str, trip_id: str) -> None:
        result = await db.execute(
            delete(Trip).where(Trip.id == trip_id, Trip.user_id == user_id)
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError("Trip", trip_id)
        await db.commit()

    async def get_summary(self, db: AsyncSession, user_id: str) -> Dict[str, Any]:
        countries = await self.list_countries(db, user_id)
        trips = await self.list_trips(db, user_id)
        return {
            "total_countries_visited": len(countries),
            "total_trips": len(trips),
            "total_distance_km": sum(t.distance_km or 0 for t in trips),
            "has_any_data": bool(countries or trips),
        }


# Singleton instance
travel_service = TravelService()
