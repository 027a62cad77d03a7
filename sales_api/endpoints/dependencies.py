"""Service dependencies bound to the per-request database session."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.services.aggregation_service import AggregationService
from sales_api.services.seed_service import SeedService
from sales_api.services.transaction_service import TransactionQueryService


def get_query_service(db: AsyncSession = Depends(get_db)) -> TransactionQueryService:
    return TransactionQueryService(db)


def get_aggregation_service(db: AsyncSession = Depends(get_db)) -> AggregationService:
    return AggregationService(db)


def get_seed_service(db: AsyncSession = Depends(get_db)) -> SeedService:
    return SeedService(db)
