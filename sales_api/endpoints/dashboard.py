"""Dashboard endpoint module.

Provides endpoints for monthly statistics, the price-range bar chart,
the category pie chart and all three combined.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from sales_api.endpoints.dependencies import get_aggregation_service
from sales_api.schemas.dashboard import (
    CategoryCount,
    CombinedResponse,
    PriceRangeCount,
    StatisticsResponse,
)
from sales_api.services.aggregation_service import AggregationService

router = APIRouter(prefix="/api", tags=["dashboard"])

MONTH_DESCRIPTION = "Month of sale (1-12), any year"


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    month: Optional[int] = Query(default=None, description=MONTH_DESCRIPTION),
    service: AggregationService = Depends(get_aggregation_service),
) -> StatisticsResponse:
    """
    Get sale statistics for the selected month.

    - **totalSaleAmount**: Sum of prices of sold items
    - **soldItems**: Number of sold items
    - **notSoldItems**: Number of items not sold
    """
    return await service.statistics(month)


@router.get("/barchart", response_model=list[PriceRangeCount])
async def get_bar_chart(
    month: Optional[int] = Query(default=None, description=MONTH_DESCRIPTION),
    service: AggregationService = Depends(get_aggregation_service),
) -> list[PriceRangeCount]:
    """
    Get item counts per price range for the selected month.

    Ranges: 0-100, 101-200, ... 801-900, 901-above.
    """
    return await service.bar_chart(month)


@router.get("/piechart", response_model=list[CategoryCount])
async def get_pie_chart(
    month: Optional[int] = Query(default=None, description=MONTH_DESCRIPTION),
    service: AggregationService = Depends(get_aggregation_service),
) -> list[CategoryCount]:
    """Get item counts per category for the selected month."""
    return await service.pie_chart(month)


@router.get("/all", response_model=CombinedResponse)
async def get_all_data(
    month: Optional[int] = Query(default=None, description=MONTH_DESCRIPTION),
    service: AggregationService = Depends(get_aggregation_service),
) -> CombinedResponse:
    """Get statistics, bar chart and pie chart data in one call."""
    return await service.combined(month)
