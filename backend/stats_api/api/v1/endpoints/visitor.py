from fastapi import APIRouter, HTTPException, Query, status
from typing import Optional

from stats_api.core.config import settings
from stats_api.schemas.harmony import Language
from stats_api.services.visitor_service import demo_dashboard

router = APIRouter()


@router.get("/dashboard")
async def get_demo_dashboard(language: Optional[Language] = Query(None)):
    """
    Static demo dashboard for visitors.

    No authentication and no database access: a fixed persona snapshot and
    its fallback Harmony estimate.
    """
    if not settings.VISITOR_MODE_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Visitor mode is disabled"
        )
    return demo_dashboard(language=language)
