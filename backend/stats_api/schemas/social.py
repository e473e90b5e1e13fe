from pydantic import BaseModel, ConfigDict, field_serializer
from typing import Optional, Literal
from datetime import datetime

FriendRank = Literal["cercle_proche", "amis"]
RelationshipStatus = Literal["none", "friends", "pending_sent", "pending_received"]
PrivacyCategory = Literal["finance", "physio", "world", "career", "social"]


class FriendRequestCreate(BaseModel):
    receiver_id: str


class FriendRequestResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    status: str
    created_at: datetime
    sender_name: Optional[str] = None
    sender_username: Optional[str] = None
    sender_avatar_url: Optional[str] = None

    @field_serializer('created_at')
    def serialize_dt(self, value: datetime) -> str:
        return value.isoformat()


class FriendshipResponse(BaseModel):
    id: str
    friend_id: str
    rank: str
    created_at: datetime
    friend_name: Optional[str] = None
    friend_username: Optional[str] = None
    friend_avatar_url: Optional[str] = None

    @field_serializer('created_at')
    def serialize_dt(self, value: datetime) -> str:
        return value.isoformat()


class FriendRankUpdate(BaseModel):
    rank: FriendRank


class RelationshipResponse(BaseModel):
    user_id: str
    status: RelationshipStatus


class PrivacySettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    finance_public: bool
    physio_public: bool
    world_public: bool
    career_public: bool
    social_public: bool


class PrivacySettingUpdate(BaseModel):
    category: PrivacyCategory
    is_public: bool


class DataAccessResponse(BaseModel):
    allowed: bool
    message: str
