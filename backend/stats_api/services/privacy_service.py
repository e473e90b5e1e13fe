"""
Privacy Service - per-category visibility flags and friend data access checks
"""

from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.models.social import PrivacySettings
from stats_api.services.friend_service import friend_service

CATEGORIES = ("finance", "physio", "world", "career", "social")

CATEGORY_LABELS = {
    "finance": "finances",
    "physio": "données physio",
    "world": "voyages",
    "career": "carrière",
    "social": "données sociales",
}

NOT_FRIENDS_MESSAGE = "Vous devez être ami avec cet utilisateur pour voir ces données"


def can_view(is_friend: bool, settings: Optional[PrivacySettings], category: str) -> bool:
    """Friendship is required, then the friend's flag for the category; no settings means private"""
    if not is_friend:
        return False
    if settings is None:
        return False
    return settings.is_public(category)


def access_message(is_friend: bool, settings: Optional[PrivacySettings], category: str) -> str:
    if not is_friend:
        return NOT_FRIENDS_MESSAGE
    if not can_view(is_friend, settings, category):
        return f"Cet utilisateur a choisi de garder ses {CATEGORY_LABELS[category]} privées"
    return ""


class PrivacyService:

    async def find_settings(self, db: AsyncSession, user_id: str) -> Optional[PrivacySettings]:
        result = await db.execute(select(PrivacySettings).where(PrivacySettings.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_settings(self, db: AsyncSession, user_id: str) -> PrivacySettings:
        """Read settings, creating the all-private defaults on first access"""
        settings = await self.find_settings(db, user_id)
        if settings is None:
            settings = PrivacySettings(user_id=user_id)
            db.add(settings)
            await db.commit()
            await db.refresh(settings)
        return settings

    async def update_setting(self, db: AsyncSession, user_id: str, category: str, is_public: bool) -> PrivacySettings:
        settings = await self.get_settings(db, user_id)
        setattr(settings, f"{category}_public", is_public)
        await db.commit()
        await db.refresh(settings)
        return settings

    async def check_access(self, db: AsyncSession, viewer_id: str, friend_id: str, category: str) -> Dict:
        is_friend = await friend_service.are_friends(db, viewer_id, friend_id)
        settings = await self.find_settings(db, friend_id) if is_friend else None
        return {
            "allowed": can_view(is_friend, settings, category),
            "message": access_message(is_friend, settings, category),
        }


# Singleton instance
privacy_service = PrivacyService()
