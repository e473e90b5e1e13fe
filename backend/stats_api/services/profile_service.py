"""
Profile Service - profile reads/updates, completeness and user search
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func
from typing import Any, Dict, List, Optional

from stats_api.core.exceptions import ConflictError, ProfileNotFoundError
from stats_api.core.logging_config import logger
from stats_api.models.profile import Profile
from stats_api.models.social import PrivacySettings
from stats_api.schemas.profile import ProfileUpdate, OnboardingUpdate

# (attribute, label) pairs each dashboard module needs before it can render
PHYSIO_FIELDS = [
    ("height", "Taille"),
    ("weight", "Poids"),
    ("gender", "Genre"),
    ("date_of_birth", "Date de naissance"),
    ("activity_level", "Niveau d'activité"),
]

PRO_FIELDS = [
    ("job_title", "Métier"),
    ("industry", "Secteur"),
    ("annual_income", "Revenu annuel"),
    ("currency", "Devise"),
]

MAP_FIELDS = [
    ("home_country", "Pays de résidence"),
    ("nationality", "Nationalité"),
]

SEARCH_LIMIT = 20


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def missing_fields(profile: Profile, fields) -> List[Dict[str, str]]:
    return [
        {"key": key, "label": label}
        for key, label in fields
        if _is_missing(getattr(profile, key, None))
    ]


def compute_completeness(profile: Profile) -> Dict[str, Any]:
    missing_physio = missing_fields(profile, PHYSIO_FIELDS)
    missing_pro = missing_fields(profile, PRO_FIELDS)
    missing_map = missing_fields(profile, MAP_FIELDS)
    return {
        "is_complete": bool(profile.onboarding_completed),
        "physio_complete": not missing_physio,
        "pro_complete": not missing_pro,
        "map_complete": not missing_map,
        "missing_physio_fields": missing_physio,
        "missing_pro_fields": missing_pro,
        "missing_map_fields": missing_map,
    }


class ProfileService:
    """Service for the per-user profile row"""

    async def create_for_user(
        self,
        db: AsyncSession,
        user_id: str,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Profile:
        """Create the profile and default (all private) privacy settings; caller commits"""
        profile = Profile(
            id=user_id,
            username=username,
            first_name=first_name,
            last_name=last_name,
        )
        db.add(profile)
        db.add(PrivacySettings(user_id=user_id))
        return profile

    async def get_profile(self, db: AsyncSession, user_id: str) -> Profile:
        result = await db.execute(select(Profile).where(Profile.id == user_id))
        profile = result.scalar_one_or_none()
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def is_username_taken(
        self, db: AsyncSession, username: str, exclude_user_id: Optional[str] = None
    ) -> bool:
        query = select(Profile.id).where(func.lower(Profile.username) == username.lower())
        if exclude_user_id:
            query = query.where(Profile.id != exclude_user_id)
        result = await db.execute(query)
        return result.first() is not None

    async def update_profile(self, db: AsyncSession, user_id: str, data: ProfileUpdate) -> Profile:
        profile = await self.get_profile(db, user_id)
        changes = data.model_dump(exclude_unset=True)

        username = changes.get("username")
        if username and await self.is_username_taken(db, username, exclude_user_id=user_id):
            raise ConflictError("Username already taken", code="USERNAME_TAKEN")

        for field, value in changes.items():
            setattr(profile, field, value)

        await db.commit()
        await db.refresh(profile)

        logger.info(f"Profile updated for user {user_id}: {sorted(changes)}")
        return profile

    async def get_completeness(self, db: AsyncSession, user_id: str) -> Dict[str, Any]:
        profile = await self.get_profile(db, user_id)
        return compute_completeness(profile)

    async def update_onboarding(self, db: AsyncSession, user_id: str, data: OnboardingUpdate) -> Profile:
        profile = await self.get_profile(db, user_id)
        profile.onboarding_step = data.step
        if data.completed:
            profile.onboarding_completed = True
        await db.commit()
        await db.refresh(profile)
        return profile

    async def search(self, db: AsyncSession, query: str, exclude_user_id: str) -> List[Profile]:
        """Case-insensitive username / first / last name search, at most 20 hits"""
        pattern = f"%{query.strip().lower()}%"
        result = await db.execute(
            select(Profile)
            .where(
                Profile.id != exclude_user_id,
                or_(
                    func.lower(Profile.username).like(pattern),
                    func.lower(Profile.first_name).like(pattern),
                    func.lower(Profile.last_name).like(pattern),
                ),
            )
            .order_by(Profile.username)
            .limit(SEARCH_LIMIT)
        )
        return list(result.scalars().all())


# Singleton instance
profile_service = ProfileService()
