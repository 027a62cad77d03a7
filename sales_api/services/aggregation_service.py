"""Aggregation service module.

Provides monthly sale statistics, the price-range histogram and the
category distribution for the dashboard charts.

Every operation filters by calendar month only (year ignored) and
validates the month before touching the database.

Price buckets keep the historical boundaries: lower bound inclusive,
upper bound exclusive, with one-unit gaps between buckets. A price of
exactly 100, 200, ... 900 (or anything in [100, 101) etc.) falls into
no bucket.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.exceptions.api_exception import ServiceError
from sales_api.models.transaction import Transaction
from sales_api.schemas.dashboard import (
    CategoryCount,
    CombinedResponse,
    PriceRangeCount,
    StatisticsResponse,
)
from sales_api.services.validation import month_of_sale_equals, validate_month

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceBucket:
    """Half-open price range [min_price, max_price); max_price None = unbounded."""

    label: str
    min_price: int
    max_price: Optional[int]


PRICE_BUCKETS: tuple[PriceBucket, ...] = (
    PriceBucket("0-100", 0, 100),
    PriceBucket("101-200", 101, 200),
    PriceBucket("201-300", 201, 300),
    PriceBucket("301-400", 301, 400),
    PriceBucket("401-500", 401, 500),
    PriceBucket("501-600", 501, 600),
    PriceBucket("601-700", 601, 700),
    PriceBucket("701-800", 701, 800),
    PriceBucket("801-900", 801, 900),
    PriceBucket("901-above", 901, None),
)


def _bucket_condition(bucket: PriceBucket):
    """WHERE condition selecting prices inside a bucket."""
    if bucket.max_price is None:
        return Transaction.price >= bucket.min_price
    return and_(
        Transaction.price >= bucket.min_price,
        Transaction.price < bucket.max_price,
    )


class AggregationService:
    """Monthly aggregates over the transactions table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def statistics(self, month: Optional[int]) -> StatisticsResponse:
        """Sold count, not-sold count and total sale amount for a month."""
        month = validate_month(month)

        query = (
            select(
                func.coalesce(
                    func.sum(case((Transaction.sold.is_(True), Transaction.price), else_=0)),
                    0,
                ).label("total_sale_amount"),
                func.coalesce(
                    func.sum(case((Transaction.sold.is_(True), 1), else_=0)), 0
                ).label("sold_items"),
                func.coalesce(
                    func.sum(case((Transaction.sold.is_(False), 1), else_=0)), 0
                ).label("not_sold_items"),
            )
            .where(month_of_sale_equals(month))
        )

        try:
            row = (await self.db.execute(query)).one()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching statistics for month %d: %s", month, exc)
            raise ServiceError("Failed to fetch statistics") from exc

        return StatisticsResponse(
            totalSaleAmount=round(float(row.total_sale_amount or 0), 2),
            soldItems=int(row.sold_items or 0),
            notSoldItems=int(row.not_sold_items or 0),
        )

    async def bar_chart(self, month: Optional[int]) -> list[PriceRangeCount]:
        """Item counts per fixed price bucket, in bucket order."""
        month = validate_month(month)

        # Single pass: one SUM(CASE ...) column per bucket
        query = (
            select(*[
                func.coalesce(
                    func.sum(case((_bucket_condition(bucket), 1), else_=0)), 0
                ).label(f"bucket_{i}")
                for i, bucket in enumerate(PRICE_BUCKETS)
            ])
            .where(month_of_sale_equals(month))
        )

        try:
            row = (await self.db.execute(query)).one()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching bar chart data for month %d: %s", month, exc)
            raise ServiceError("Failed to fetch bar chart data") from exc

        return [
            PriceRangeCount(range=bucket.label, count=int(row[i] or 0))
            for i, bucket in enumerate(PRICE_BUCKETS)
        ]

    async def pie_chart(self, month: Optional[int]) -> list[CategoryCount]:
        """Item counts per category present in the month."""
        month = validate_month(month)

        query = (
            select(Transaction.category, func.count().label("count"))
            .where(month_of_sale_equals(month))
            .group_by(Transaction.category)
            .order_by(Transaction.category)
        )

        try:
            rows = (await self.db.execute(query)).all()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching pie chart data for month %d: %s", month, exc)
            raise ServiceError("Failed to fetch pie chart data") from exc

        return [CategoryCount(category=row.category, count=row.count) for row in rows]

    async def combined(self, month: Optional[int]) -> CombinedResponse:
        """Statistics, bar chart and pie chart for one month.

        Any failure in one part fails the whole call.
        """
        month = validate_month(month)
        return CombinedResponse(
            statistics=await self.statistics(month),
            barChartData=await self.bar_chart(month),
            pieChartData=await self.pie_chart(month),
        )
