from stats_api.models.user import User
from stats_api.models.profile import Profile
from stats_api.models.health import SleepRecord, SportSession, BodyMeasurement, NutritionLog
from stats_api.models.finance import Asset, Liability
from stats_api.models.travel import VisitedCountry, Trip
from stats_api.models.social import FriendRequest, Friendship, PrivacySettings

__all__ = [
    "User",
    "Profile",
    "SleepRecord",
    "SportSession",
    "BodyMeasurement",
    "NutritionLog",
    "Asset",
    "Liability",
    "VisitedCountry",
    "Trip",
    "FriendRequest",
    "Friendship",
    "PrivacySettings",
]
