"""
Snapshot Service - builds the metrics document submitted for Harmony analysis

The snapshot is assembled from the user's stored data: the last 7 sleep
records, the last 10 sport sessions, the latest body measurement, asset and
liability totals, career fields from the profile, friendship counts and the
number of visited countries. There is no interaction log or achievement
table, so `social_activities` and `achievements` are empty and
`active_monthly` is 0.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.models.finance import Asset, Liability
from stats_api.models.health import SleepRecord, SportSession, BodyMeasurement
from stats_api.models.profile import Profile
from stats_api.schemas.harmony import (
    HarmonySnapshot,
    HealthRecords,
    SleepEntry,
    ActivityEntry,
    Measurements,
    AssetTotals,
    LiabilityTotals,
    Career,
    Connections,
    default_user_goals,
)
from stats_api.services.finance_service import INVESTMENT_TYPES, finance_service
from stats_api.services.friend_service import friend_service
from stats_api.services.travel_service import travel_service

SLEEP_SAMPLE = 7
ACTIVITY_SAMPLE = 10


def asset_totals(assets: List[Asset]) -> AssetTotals:
    return AssetTotals(
        total=sum(a.current_value for a in assets),
        liquid=sum(a.current_value for a in assets if a.is_liquid),
        real_estate=sum(a.current_value for a in assets if a.asset_type == "real_estate"),
        investments=sum(a.current_value for a in assets if a.asset_type in INVESTMENT_TYPES),
    )


def liability_totals(liabilities: List[Liability]) -> LiabilityTotals:
    total = sum(l.remaining_amount for l in liabilities)
    mortgages = sum(l.remaining_amount for l in liabilities if l.liability_type == "mortgage")
    return LiabilityTotals(total=total, mortgages=mortgages, other_debt=total - mortgages)


class SnapshotService:

    async def _recent(self, db: AsyncSession, model, user_id: str, limit: int):
        result = await db.execute(
            select(model)
            .where(model.user_id == user_id)
            .order_by(model.date.desc(), model.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def build(
        self,
        db: AsyncSession,
        user_id: str,
        profile: Profile,
        language: Optional[str] = None,
    ) -> HarmonySnapshot:
        sleep = await self._recent(db, SleepRecord, user_id, SLEEP_SAMPLE)
        sport = await self._recent(db, SportSession, user_id, ACTIVITY_SAMPLE)
        latest_body = await self._recent(db, BodyMeasurement, user_id, 1)
        body: Optional[BodyMeasurement] = latest_body[0] if latest_body else None

        assets = await finance_service.list_assets(db, user_id)
        liabilities = await finance_service.list_liabilities(db, user_id)
        friends = await friend_service.count_friends(db, user_id)
        countries = await travel_service.count_countries(db, user_id)

        return HarmonySnapshot(
            health_records=HealthRecords(
                sleep=[
                    SleepEntry(date=s.date.isoformat(), duration=s.duration, quality=s.quality)
                    for s in sleep
                ],
                activity=[
                    ActivityEntry(
                        date=s.date.isoformat(), type=s.type, duration=s.duration, intensity=s.intensity
                    )
                    for s in sport
                ],
                measurements=Measurements(
                    weight=(body.weight if body and body.weight else profile.weight) or 0,
                    resting_heart_rate=body.resting_heart_rate if body else None,
                ),
            ),
            assets=asset_totals(assets),
            liabilities=liability_totals(liabilities),
            career=Career(
                position=profile.job_title or "",
                years_experience=profile.experience_years or 0,
                industry=profile.industry or "",
            ),
            connections=Connections(
                total=friends["total"],
                inner_circle=friends["inner_circle"],
                active_monthly=0,
            ),
            visited_countries=countries,
            user_goals=default_user_goals(),
            language=language,
        )


# Singleton instance
snapshot_service = SnapshotService()
