"""
Finance Service - assets, liabilities and net worth
"""

from typing import Any, Dict, List

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.core.exceptions import ResourceNotFoundError
from stats_api.core.logging_config import logger
from stats_api.models.finance import Asset, Liability
from stats_api.schemas.finance import AssetCreate, LiabilityCreate

# Asset types counted as financial investments in the analysis snapshot
INVESTMENT_TYPES = {"stocks", "bonds", "crypto", "etf", "savings", "retirement"}


def summarize(assets: List[Asset], liabilities: List[Liability]) -> Dict[str, Any]:
    total_assets = sum(a.current_value for a in assets)
    total_liabilities = sum(l.remaining_amount for l in liabilities)
    return {
        "total_assets": total_assets,
        "total_liabilities": total_liabilities,
        "net_worth": total_assets - total_liabilities,
        "liquid_assets": sum(a.current_value for a in assets if a.is_liquid),
        "has_any_data": bool(assets or liabilities),
    }


class FinanceService:

    async def create_asset(self, db: AsyncSession, user_id: str, data: AssetCreate) -> Asset:
        asset = Asset(user_id=user_id, **data.model_dump())
        db.add(asset)
        await db.commit()
        await db.refresh(asset)
        logger.info(f"Created asset {asset.asset_type} for user {user_id}")
        return asset

    async def list_assets(self, db: AsyncSession, user_id: str) -> List[Asset]:
        result = await db.execute(
            select(Asset).where(Asset.user_id == user_id).order_by(Asset.current_value.desc())
        )
        return list(result.scalars().all())

    async def delete_asset(self, db: AsyncSession, user_id: str, asset_id: str) -> None:
        result = await db.execute(
            delete(Asset).where(Asset.id == asset_id, Asset.user_id == user_id)
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError("Asset", asset_id)
        await db.commit()

    async def create_liability(self, db: AsyncSession, user_id: str, data: LiabilityCreate) -> Liability:
        liability = Liability(user_id=user_id, **data.model_dump())
        db.add(liability)
        await db.commit()
        await db.refresh(liability)
        logger.info(f"Created liability {liability.liability_type} for user {user_id}")
        return liability

    async def list_liabilities(self, db: AsyncSession, user_id: str) -> List[Liability]:
        result = await db.execute(
            select(Liability)
            .where(Liability.user_id == user_id)
            .order_by(Liability.remaining_amount.desc())
        )
        return list(result.scalars().all())

    async def delete_liability(self, db: AsyncSession, user_id: str, liability_id: str) -> None:
        result = await db.execute(
            delete(Liability).where(Liability.id == liability_id, Liability.user_id == user_id)
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError("Liability", liability_id)
        await db.commit()

    async def get_summary(self, db: AsyncSession, user_id: str) -> Dict[str, Any]:
        assets = await self.list_assets(db, user_id)
        liabilities = await self.list_liabilities(db, user_id)
        return summarize(assets, liabilities)


# Singleton instance
finance_service = FinanceService()
