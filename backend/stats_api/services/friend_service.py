"""
Friend Service - friend requests and the (bidirectional) friendship graph

Accepting a request writes one Friendship row per direction with rank
"amis"; deletes and rank changes always touch both directions. Only the
receiver of a request may accept or reject it.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, update, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.core.exceptions import (
    AuthorizationError,
    ConflictError,
    ResourceNotFoundError,
    UserNotFoundError,
)
from stats_api.core.logging_config import logger
from stats_api.core.types import utcnow
from stats_api.models.profile import Profile
from stats_api.models.social import FriendRequest, Friendship
from stats_api.models.user import User

DEFAULT_RANK = "amis"
INNER_CIRCLE_RANK = "cercle_proche"


def _pair(a_col, b_col, a: str, b: str):
    """Match (a, b) in either direction"""
    return or_(
        and_(a_col == a, b_col == b),
        and_(a_col == b, b_col == a),
    )


class FriendService:

    async def _profiles_by_id(self, db: AsyncSession, user_ids: List[str]) -> Dict[str, Profile]:
        if not user_ids:
            return {}
        result = await db.execute(select(Profile).where(Profile.id.in_(user_ids)))
        return {p.id: p for p in result.scalars().all()}

    async def are_friends(self, db: AsyncSession, user_id: str, other_id: str) -> bool:
        result = await db.execute(
            select(Friendship.id).where(_pair(Friendship.user_id, Friendship.friend_id, user_id, other_id))
        )
        return result.first() is not None

    async def _pending_between(self, db: AsyncSession, user_id: str, other_id: str) -> Optional[FriendRequest]:
        result = await db.execute(
            select(FriendRequest).where(
                _pair(FriendRequest.sender_id, FriendRequest.receiver_id, user_id, other_id),
                FriendRequest.status == "pending",
            )
        )
        return result.scalars().first()

    # ==================== REQUESTS ====================

    async def send_request(self, db: AsyncSession, sender_id: str, receiver_id: str) -> FriendRequest:
        if sender_id == receiver_id:
            raise ConflictError("Vous ne pouvez pas vous ajouter vous-même", code="SELF_REQUEST")

        receiver = await db.execute(select(User.id).where(User.id == receiver_id))
        if receiver.first() is None:
            raise UserNotFoundError(receiver_id)

        if await self.are_friends(db, sender_id, receiver_id):
            raise ConflictError("Déjà amis", code="ALREADY_FRIENDS")

        if await self._pending_between(db, sender_id, receiver_id) is not None:
            raise ConflictError("Demande déjà envoyée", code="REQUEST_PENDING")

        request = FriendRequest(sender_id=sender_id, receiver_id=receiver_id, status="pending")
        db.add(request)
        await db.commit()
        await db.refresh(request)

        logger.info(f"Friend request {request.id}: {sender_id} -> {receiver_id}")
        return request

    async def _serialize_requests(self, db: AsyncSession, requests: List[FriendRequest]) -> List[Dict[str, Any]]:
        profiles = await self._profiles_by_id(db, [r.sender_id for r in requests])
        items = []
        for r in requests:
            sender = profiles.get(r.sender_id)
            items.append({
                "id": r.id,
                "sender_id": r.sender_id,
                "receiver_id": r.receiver_id,
                "status": r.status,
                "created_at": r.created_at,
                "sender_name": sender.display_name if sender else "Utilisateur",
                "sender_username": sender.username if sender else None,
                "sender_avatar_url": sender.avatar_url if sender else None,
            })
        return items

    async def list_pending(self, db: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
        """Pending requests received by user_id, newest first"""
        result = await db.execute(
            select(FriendRequest)
            .where(FriendRequest.receiver_id == user_id, FriendRequest.status == "pending")
            .order_by(FriendRequest.created_at.desc())
        )
        return await self._serialize_requests(db, list(result.scalars().all()))

    async def list_sent(self, db: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
        result = await db.execute(
            select(FriendRequest)
            .where(FriendRequest.sender_id == user_id)
            .order_by(FriendRequest.created_at.desc())
        )
        return await self._serialize_requests(db, list(result.scalars().all()))

    async def _get_request_for_receiver(self, db: AsyncSession, request_id: str, user_id: str) -> FriendRequest:
        result = await db.execute(select(FriendRequest).where(FriendRequest.id == request_id))
        request = result.scalar_one_or_none()
        if request is None:
            raise ResourceNotFoundError("FriendRequest", request_id)
        if request.receiver_id != user_id:
            raise AuthorizationError("Only the receiver can respond to this request")
        if request.status != "pending":
            raise ConflictError("Request already handled", code="REQUEST_HANDLED")
        return request

    async def accept_request(self, db: AsyncSession, request_id: str, user_id: str) -> FriendRequest:
        request = await self._get_request_for_receiver(db, request_id, user_id)
        request.status = "accepted"
        request.updated_at = utcnow()

        if not await self.are_friends(db, request.sender_id, user_id):
            db.add_all([
                Friendship(user_id=user_id, friend_id=request.sender_id, rank=DEFAULT_RANK),
                Friendship(user_id=request.sender_id, friend_id=user_id, rank=DEFAULT_RANK),
            ])

        await db.commit()
        await db.refresh(request)
        logger.info(f"Friend request {request_id} accepted by {user_id}")
        return request

    async def reject_request(self, db: AsyncSession, request_id: str, user_id: str) -> FriendRequest:
        request = await self._get_request_for_receiver(db, request_id, user_id)
        request.status = "rejected"
        request.updated_at = utcnow()
        await db.commit()
        await db.refresh(request)
        return request

    # ==================== FRIENDSHIPS ====================

    async def list_friends(self, db: AsyncSession, user_id: str) -> List[Dict[str, Any]]:
        result = await db.execute(
            select(Friendship)
            .where(Friendship.user_id == user_id)
            .order_by(Friendship.created_at.desc())
        )
        friendships = list(result.scalars().all())
        profiles = await self._profiles_by_id(db, [f.friend_id for f in friendships])

        items = []
        for f in friendships:
            friend = profiles.get(f.friend_id)
            items.append({
                "id": f.id,
                "friend_id": f.friend_id,
                "rank": f.rank,
                "created_at": f.created_at,
                "friend_name": friend.display_name if friend else "Utilisateur",
                "friend_username": friend.username if friend else None,
                "friend_avatar_url": friend.avatar_url if friend else None,
            })
        return items

    async def delete_friend(self, db: AsyncSession, user_id: str, friend_id: str) -> None:
        result = await db.execute(
            delete(Friendship).where(_pair(Friendship.user_id, Friendship.friend_id, user_id, friend_id))
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError("Friendship", friend_id)
        await db.commit()
        logger.info(f"Friendship removed: {user_id} <-> {friend_id}")

    async def update_rank(self, db: AsyncSession, user_id: str, friend_id: str, rank: str) -> None:
        result = await db.execute(
            update(Friendship)
            .where(_pair(Friendship.user_id, Friendship.friend_id, user_id, friend_id))
            .values(rank=rank)
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError("Friendship", friend_id)
        await db.commit()

    async def get_relationship_status(self, db: AsyncSession, user_id: str, target_id: str) -> str:
        result = await db.execute(
            select(Friendship.id).where(Friendship.user_id == user_id, Friendship.friend_id == target_id)
        )
        if result.first() is not None:
            return "friends"

        pending = await self._pending_between(db, user_id, target_id)
        if pending is not None:
            return "pending_sent" if pending.sender_id == user_id else "pending_received"
        return "none"

    async def count_friends(self, db: AsyncSession, user_id: str) -> Dict[str, int]:
        result = await db.execute(select(Friendship.rank).where(Friendship.user_id == user_id))
        ranks = list(result.scalars().all())
        return {
            "total": len(ranks),
            "inner_circle": sum(1 for r in ranks if r == INNER_CIRCLE_RANK),
        }


# Singleton instance
friend_service = FriendService()
