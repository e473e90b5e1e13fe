"""
Visitor Service - static demo dashboard for unauthenticated clients

Nothing here touches the database: the persona is a fixed snapshot and its
Harmony block is the deterministic fallback estimate.
"""

from datetime import date, timedelta
from typing import Any, Dict, Optional

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
    SocialActivity,
    Achievement,
    default_user_goals,
)
from stats_api.services import harmony_scoring

DEMO_PROFILE = {
    "id": "demo",
    "username": "demo",
    "first_name": "Camille",
    "last_name": "Durand",
    "nationality": "FR",
    "home_country": "France",
    "currency": "EUR",
    "units_preference": "metric",
    "job_title": "Lead Developer",
    "industry": "Tech / SaaS",
    "experience_years": 5,
    "pinned_module": "A",
}

# (days ago, minutes, quality)
_SLEEP = [
    (0, 480, "excellent"),
    (1, 432, "good"),
    (2, 420, "excellent"),
    (3, 390, "good"),
    (4, 480, "excellent"),
    (5, 510, "excellent"),
    (6, 405, "fair"),
]

# (days ago, type, minutes, intensity)
_SPORT = [
    (1, "running", 45, "high"),
    (2, "gym", 60, "moderate"),
    (3, "yoga", 30, "low"),
    (4, "cycling", 90, "high"),
    (6, "hiit", 25, "extreme"),
]


def demo_snapshot(today: Optional[date] = None, language: Optional[str] = None) -> HarmonySnapshot:
    today = today or date.today()

    def day(offset: int) -> str:
        return (today - timedelta(days=offset)).isoformat()

    return HarmonySnapshot(
        health_records=HealthRecords(
            sleep=[SleepEntry(date=day(d), duration=m, quality=q) for d, m, q in _SLEEP],
            activity=[
                ActivityEntry(date=day(d), type=t, duration=m, intensity=i) for d, t, m, i in _SPORT
            ],
            measurements=Measurements(weight=74.5, hrv=62, resting_heart_rate=54),
        ),
        assets=AssetTotals(total=922450, liquid=154450, real_estate=680000, investments=118450),
        liabilities=LiabilityTotals(total=425000, mortgages=410000, other_debt=15000),
        career=Career(position="Lead Developer", years_experience=5, industry="Tech / SaaS"),
        connections=Connections(total=10, inner_circle=4, active_monthly=10),
        social_activities=[
            SocialActivity(date=day(2), type="dinner", quality="great"),
            SocialActivity(date=day(5), type="call", quality="good"),
            SocialActivity(date=day(9), type="event", quality="neutral"),
        ],
        achievements=[
            Achievement(title="Premier semi-marathon", date=day(40), category="sport", rarity="rare"),
            Achievement(title="Promotion Lead", date=day(120), category="career", rarity="epic"),
            Achievement(title="10 pays visités", date=day(400), category="travel", rarity="common"),
        ],
        visited_countries=12,
        user_goals=default_user_goals(),
        language=language,
    )


def demo_dashboard(today: Optional[date] = None, language: Optional[str] = None) -> Dict[str, Any]:
    snapshot = demo_snapshot(today, language)
    return {
        "is_demo": True,
        "profile": DEMO_PROFILE,
        "snapshot": snapshot.model_dump(mode="json"),
        "harmony": harmony_scoring.estimate(snapshot, today),
    }
