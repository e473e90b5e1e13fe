"""
Harmony endpoints.

`POST /analyze` is the cached language model gateway. Once the caller is
authenticated, every failure (bad body, model error, invalid model output,
database error on save) is reported as a 500 with {"error": message}.
"""
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Callable, Optional

from stats_api.core.database import get_db
from stats_api.core.logging_config import logger
from stats_api.core.rate_limiter import ai_operation_rate_limit
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.harmony import (
    HarmonyLatestResponse,
    HarmonySnapshot,
    CompareRequest,
    CompareResponse,
    Language,
)
from stats_api.services import harmony_scoring
from stats_api.services.harmony_service import harmony_service
from stats_api.services.profile_service import profile_service
from stats_api.services.snapshot_service import snapshot_service
from stats_api.utils.claude_client import get_claude_client_factory

router = APIRouter()


@router.post("/analyze")
@ai_operation_rate_limit()
async def analyze_harmony(
    request: Request,
    force: Optional[str] = Query(None, description="Skip the cache and call the model when exactly \"true\""),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client_factory: Callable[[], Any] = Depends(get_claude_client_factory),
):
    """
    Analyze a metrics snapshot, serving a cached analysis when possible.

    The body is taken as-is (any JSON object); its `language` key picks the
    prompt and is excluded from the content hash.
    """
    forced = force == "true"
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            raise ValueError("Request body must be a JSON object")

        return await harmony_service.analyze(
            db, current_user.id, payload, client_factory, force=forced
        )
    except Exception as e:
        logger.log_error_with_context(e, context="harmony.analyze", user_id=current_user.id, forced=forced)
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or "Internal Server Error"}
        )


@router.get("/latest", response_model=HarmonyLatestResponse)
async def get_latest_analysis(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await harmony_service.get_latest(db, current_user.id)


@router.delete("/cache")
async def clear_analysis_cache(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Forget the stored analysis so the next request calls the model"""
    await harmony_service.clear_cache(db, current_user.id)
    return {"success": True}


@router.get("/snapshot", response_model=HarmonySnapshot)
async def get_snapshot(
    language: Optional[Language] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The metrics snapshot the dashboard submits to /analyze, built from stored data"""
    profile = await profile_service.get_profile(db, current_user.id)
    return await snapshot_service.build(db, current_user.id, profile, language=language)


@router.post("/estimate")
async def estimate_harmony(
    snapshot: HarmonySnapshot,
    current_user: User = Depends(get_current_user),
):
    """Deterministic fallback analysis; nothing is cached and no model is called"""
    return harmony_scoring.estimate(snapshot)


@router.post("/compare", response_model=CompareResponse)
async def compare_harmony(
    data: CompareRequest,
    current_user: User = Depends(get_current_user),
):
    return harmony_scoring.compare_score(
        data.user_scores, data.friends_avg, data.national_avg, data.worldwide_avg
    )
