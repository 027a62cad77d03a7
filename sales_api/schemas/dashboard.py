"""Dashboard schemas module.

Defines response schemas for the monthly statistics, price-range bar chart,
category pie chart and combined endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field


# --- Statistics Cards Component ---

class StatisticsResponse(BaseModel):
    """Sale statistics for a single month (any year)."""

    total_sale_amount: float = Field(
        ...,
        alias="totalSaleAmount",
        description="Sum of prices of sold items",
    )
    sold_items: int = Field(
        ...,
        alias="soldItems",
        description="Number of sold items",
    )
    not_sold_items: int = Field(
        ...,
        alias="notSoldItems",
        description="Number of items not sold",
    )

    model_config = ConfigDict(populate_by_name=True)


# --- Bar Chart Component ---

class PriceRangeCount(BaseModel):
    """Number of items in one price bucket."""

    price_range: str = Field(
        ...,
        alias="range",
        description="Bucket label, e.g. '101-200'",
    )
    count: int = Field(..., description="Number of items in the bucket")

    model_config = ConfigDict(populate_by_name=True)


# --- Pie Chart Component ---

class CategoryCount(BaseModel):
    """Number of items in one category."""

    category: str = Field(..., description="Category name")
    count: int = Field(..., description="Number of items in the category")


# --- Combined ---

class CombinedResponse(BaseModel):
    """Statistics, bar chart and pie chart data for one month."""

    statistics: StatisticsResponse
    bar_chart_data: list[PriceRangeCount] = Field(..., alias="barChartData")
    pie_chart_data: list[CategoryCount] = Field(..., alias="pieChartData")

    model_config = ConfigDict(populate_by_name=True)
