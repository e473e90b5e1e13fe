from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from stats_api.core.database import get_db
from stats_api.models.user import User
from stats_api.modules.auth.dependencies import get_current_user
from stats_api.schemas.finance import (
    AssetCreate,
    AssetResponse,
    LiabilityCreate,
    LiabilityResponse,
    FinanceSummary,
)
from stats_api.services.finance_service import finance_service

router = APIRouter()


@router.post("/assets", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    data: AssetCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await finance_service.create_asset(db, current_user.id, data)


@router.get("/assets", response_model=List[AssetResponse])
async def list_assets(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Assets ordered by current value, largest first"""
    return await finance_service.list_assets(db, current_user.id)


@router.delete("/assets/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(
    asset_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await finance_service.delete_asset(db, current_user.id, asset_id)


@router.post("/liabilities", response_model=LiabilityResponse, status_code=status.HTTP_201_CREATED)
async def create_liability(
    data: LiabilityCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await finance_service.create_liability(db, current_user.id, data)


@router.get("/liabilities", response_model=List[LiabilityResponse])
async def list_liabilities(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await finance_service.list_liabilities(db, current_user.id)


@router.delete("/liabilities/{liability_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_liability(
    liability_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await finance_service.delete_liability(db, current_user.id, liability_id)


@router.get("/summary", response_model=FinanceSummary)
async def get_finance_summary(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Total assets, total liabilities and net worth"""
    return await finance_service.get_summary(db, current_user.id)
