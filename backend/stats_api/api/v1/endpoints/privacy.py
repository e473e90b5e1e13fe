from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.core.database import get_db
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.social import PrivacySettingsResponse, PrivacySettingUpdate
from stats_api.services.privacy_service import privacy_service

router = APIRouter()


@router.get("", response_model=PrivacySettingsResponse)
async def get_privacy_settings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Current visibility flags; all categories start private"""
    return await privacy_service.get_settings(db, current_user.id)


@router.patch("", response_model=PrivacySettingsResponse)
async def update_privacy_setting(
    data: PrivacySettingUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await privacy_service.update_setting(db, current_user.id, data.category, data.is_public)
