from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from stats_api.core.database import get_db
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.profile import (
    ProfileUpdate,
    ProfileResponse,
    PublicProfile,
    ProfileCompleteness,
    OnboardingUpdate,
)
from stats_api.services.profile_service import profile_service

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await profile_service.get_profile(db, current_user.id)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update only the provided profile fields; usernames are unique"""
    return await profile_service.update_profile(db, current_user.id, data)


@router.get("/me/completeness", response_model=ProfileCompleteness)
async def get_profile_completeness(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Which physio / pro / map fields are still missing"""
    return await profile_service.get_completeness(db, current_user.id)


@router.post("/me/onboarding", response_model=ProfileResponse)
async def update_onboarding(
    data: OnboardingUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await profile_service.update_onboarding(db, current_user.id, data)


@router.get("/search", response_model=List[PublicProfile])
async def search_profiles(
    q: str = Query(..., min_length=1, max_length=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Search other users by username or name (max 20 results)"""
    return await profile_service.search(db, q, exclude_user_id=current_user.id)
