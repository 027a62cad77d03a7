"""Tests for aggregation service."""
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from sales_api.exceptions.api_exception import ServiceError, ValidationError
from sales_api.services.aggregation_service import PRICE_BUCKETS, AggregationService


class TestPriceBuckets:
    """Tests for the fixed bucket table."""

    def test_bucket_labels_in_order(self):
        assert [b.label for b in PRICE_BUCKETS] == [
            "0-100", "101-200", "201-300", "301-400", "401-500",
            "501-600", "601-700", "701-800", "801-900", "901-above",
        ]

    def test_last_bucket_unbounded(self):
        assert PRICE_BUCKETS[-1].min_price == 901
        assert PRICE_BUCKETS[-1].max_price is None

    def test_buckets_leave_one_unit_gaps(self):
        """Each bucket starts one unit after the previous upper bound."""
        for previous, current in zip(PRICE_BUCKETS, PRICE_BUCKETS[1:]):
            assert current.min_price == previous.max_price + 1


@pytest.mark.asyncio
class TestStatistics:
    """Integration tests for monthly statistics."""

    async def test_statistics_for_month(self, db_session, sample_transactions):
        """March: three sold, two unsold, across years."""
        stats = await AggregationService(db_session).statistics(3)
        assert stats.sold_items == 3
        assert stats.not_sold_items == 2
        assert stats.total_sale_amount == pytest.approx(1217.99)

    async def test_sold_plus_unsold_equals_month_total(self, db_session, sample_transactions):
        service = AggregationService(db_session)
        for month, expected in ((3, 5), (7, 2), (11, 1), (12, 0)):
            stats = await service.statistics(month)
            assert stats.sold_items + stats.not_sold_items == expected

    async def test_total_is_zero_when_nothing_sold(self, db_session, sample_transactions):
        """November has only an unsold item; the sum is 0, not null."""
        stats = await AggregationService(db_session).statistics(11)
        assert stats.sold_items == 0
        assert stats.total_sale_amount == 0

    async def test_empty_month(self, db_session, sample_transactions):
        stats = await AggregationService(db_session).statistics(12)
        assert stats.model_dump(by_alias=True) == {
            "totalSaleAmount": 0,
            "soldItems": 0,
            "notSoldItems": 0,
        }


@pytest.mark.asyncio
class TestBarChart:
    """Integration tests for the price-range histogram."""

    async def test_bar_chart_counts(self, db_session, sample_transactions):
        """Price 100 falls in the gap and is not counted."""
        data = await AggregationService(db_session).bar_chart(3)
        counts = {item.price_range: item.count for item in data}
        assert len(data) == 10
        assert counts["0-100"] == 2
        assert counts["101-200"] == 1
        assert counts["901-above"] == 1
        assert sum(counts.values()) == 4

    async def test_bar_chart_sum_not_above_month_total(self, db_session, sample_transactions):
        service = AggregationService(db_session)
        for month in range(1, 13):
            data = await service.bar_chart(month)
            stats = await service.statistics(month)
            assert sum(item.count for item in data) <= stats.sold_items + stats.not_sold_items

    async def test_bar_chart_empty_month(self, db_session, sample_transactions):
        data = await AggregationService(db_session).bar_chart(12)
        assert [item.count for item in data] == [0] * 10


@pytest.mark.asyncio
class TestPieChart:
    """Integration tests for the category distribution."""

    async def test_pie_chart_counts(self, db_session, sample_transactions):
        data = await AggregationService(db_session).pie_chart(3)
        assert [(item.category, item.count) for item in data] == [
            ("electronics", 2),
            ("jewelery", 1),
            ("men's clothing", 1),
            ("women's clothing", 1),
        ]

    async def test_pie_chart_partitions_month(self, db_session, sample_transactions):
        data = await AggregationService(db_session).pie_chart(7)
        assert sum(item.count for item in data) == 2

    async def test_pie_chart_empty_month(self, db_session, sample_transactions):
        assert await AggregationService(db_session).pie_chart(12) == []


@pytest.mark.asyncio
class TestCombined:
    """Tests for the combined statistics + charts call."""

    async def test_combined_matches_individual_calls(self, db_session, sample_transactions):
        service = AggregationService(db_session)
        combined = await service.combined(3)
        assert combined.statistics == await service.statistics(3)
        assert combined.bar_chart_data == await service.bar_chart(3)
        assert combined.pie_chart_data == await service.pie_chart(3)

    async def test_combined_fails_when_any_part_fails(self, db_session, sample_transactions):
        service = AggregationService(db_session)
        service.pie_chart = AsyncMock(side_effect=ServiceError("Failed to fetch pie chart data"))
        with pytest.raises(ServiceError):
            await service.combined(3)


@pytest.mark.asyncio
class TestValidation:
    """Month validation happens before any database access."""

    @pytest.mark.parametrize("operation", ["statistics", "bar_chart", "pie_chart", "combined"])
    @pytest.mark.parametrize("month", [None, 0, 13])
    async def test_invalid_month_skips_store(self, operation, month):
        db = AsyncMock()
        with pytest.raises(ValidationError) as exc_info:
            await getattr(AggregationService(db), operation)(month)
        assert exc_info.value.status_code == 400
        db.execute.assert_not_awaited()

    @pytest.mark.parametrize("operation", ["statistics", "bar_chart", "pie_chart"])
    async def test_store_failure_raises_service_error(self, operation):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        with pytest.raises(ServiceError):
            await getattr(AggregationService(db), operation)(3)
