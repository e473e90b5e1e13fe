"""
Friends endpoints: requests, friendships, relationship status and the
per-category data access check used before showing a friend's dashboard.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from stats_api.core.database import get_db
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.social import (
    FriendRequestCreate,
    FriendRequestResponse,
    FriendshipResponse,
    FriendRankUpdate,
    RelationshipResponse,
    DataAccessResponse,
    PrivacyCategory,
)
from stats_api.services.friend_service import friend_service
from stats_api.services.privacy_service import privacy_service

router = APIRouter()


# ==================== REQUESTS ====================

@router.post("/requests", response_model=FriendRequestResponse, status_code=status.HTTP_201_CREATED)
async def send_friend_request(
    data: FriendRequestCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await friend_service.send_request(db, current_user.id, data.receiver_id)


@router.get("/requests/pending", response_model=List[FriendRequestResponse])
async def list_pending_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Requests waiting for the caller's answer"""
    return await friend_service.list_pending(db, current_user.id)


@router.get("/requests/sent", response_model=List[FriendRequestResponse])
async def list_sent_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await friend_service.list_sent(db, current_user.id)


@router.post("/requests/{request_id}/accept", response_model=FriendRequestResponse)
async def accept_friend_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await friend_service.accept_request(db, request_id, current_user.id)


@router.post("/requests/{request_id}/reject", response_model=FriendRequestResponse)
async def reject_friend_request(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await friend_service.reject_request(db, request_id, current_user.id)


# ==================== FRIENDSHIPS ====================

@router.get("", response_model=List[FriendshipResponse])
async def list_friends(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await friend_service.list_friends(db, current_user.id)


@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_friend(
    friend_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await friend_service.delete_friend(db, current_user.id, friend_id)


@router.patch("/{friend_id}/rank", status_code=status.HTTP_204_NO_CONTENT)
async def update_friend_rank(
    friend_id: str,
    data: FriendRankUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await friend_service.update_rank(db, current_user.id, friend_id, data.rank)


@router.get("/{user_id}/status", response_model=RelationshipResponse)
async def get_relationship_status(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    relationship = await friend_service.get_relationship_status(db, current_user.id, user_id)
    return {"user_id": user_id, "status": relationship}


@router.get("/{friend_id}/access/{category}", response_model=DataAccessResponse)
async def check_friend_data_access(
    friend_id: str,
    category: PrivacyCategory,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Whether the caller may see `category` data on a friend's dashboard"""
    return await privacy_service.check_access(db, current_user.id, friend_id, category)
