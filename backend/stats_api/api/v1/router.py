from fastapi import APIRouter
from stats_api.api.v1.endpoints import (
    auth,
    profiles,
    harmony,
    health_data,
    finance,
    travel,
    friends,
    privacy,
    visitor,
    health,
)

api_router = APIRouter()

api_router.include_router(health.router)

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(harmony.router, prefix="/harmony", tags=["Harmony"])
api_router.include_router(health_data.router, prefix="/health-data", tags=["Health Data"])
api_router.include_router(finance.router, prefix="/finance", tags=["Finance"])
api_router.include_router(travel.router, prefix="/travel", tags=["Travel"])
api_router.include_router(friends.router, prefix="/friends", tags=["Friends"])
api_router.include_router(privacy.router, prefix="/privacy", tags=["Privacy"])
api_router.include_router(visitor.router, prefix="/visitor", tags=["Visitor"])
