"""Friend graph and per-category privacy flags"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from stats_api.core.database import Base
from stats_api.core.types import GUID, generate_uuid, utcnow


class FriendRequest(Base):
    __tablename__ = "friend_requests"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    sender_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), default="pending", nullable=False)  # pending, accepted, rejected

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<FriendRequest {self.sender_id} -> {self.receiver_id} {self.status}>"


class Friendship(Base):
    """
    One direction of a friendship. Accepting a request writes both
    (user, friend) and (friend, user) rows, and rank updates touch both.
    """
    __tablename__ = "friendships"
    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uq_friendships_pair"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    rank = Column(String(20), default="amis", nullable=False)  # cercle_proche, amis

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Friendship {self.user_id} -> {self.friend_id} ({self.rank})>"


class PrivacySettings(Base):
    __tablename__ = "privacy_settings"

    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    finance_public = Column(Boolean, default=False, nullable=False)
    physio_public = Column(Boolean, default=False, nullable=False)
    world_public = Column(Boolean, default=False, nullable=False)
    career_public = Column(Boolean, default=False, nullable=False)
    social_public = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="privacy_settings")

    def is_public(self, category: str) -> bool:
        return bool(getattr(self, f"{category}_public", False))
