"""Transaction query service module.

Translates search/pagination/month parameters into a single filtered
query against the transactions table.

Matching rules:
- Month: calendar month of date_of_sale, year ignored (optional)
- Text: case-insensitive substring of title or description
- Price: exact equality when the search text parses as a number
- Month and text/price conditions are combined with AND
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from sales_api.exceptions.api_exception import NotFoundError, ServiceError, ValidationError
from sales_api.models.transaction import Transaction
from sales_api.services.validation import month_of_sale_equals, parse_price, validate_month

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10


@dataclass(frozen=True)
class QueryFilter:
    """Validated, immutable transaction list parameters."""

    search: str = ""
    price: Optional[Decimal] = None
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE
    month: Optional[int] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class TransactionPage:
    """One page of matching transactions plus the total match count."""

    total: int
    page: int
    per_page: int
    transactions: list[Transaction]


def build_query_filter(
    search: Optional[str] = "",
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
    month: Optional[int] = None,
) -> QueryFilter:
    """Build a QueryFilter from raw request parameters.

    Raises:
        ValidationError: page < 1, per_page < 1 or month outside 1..12.
    """
    if page < 1:
        raise ValidationError("Invalid page. Page numbers start at 1.")
    if per_page < 1:
        raise ValidationError("Invalid perPage. It must be a positive integer.")
    if month is not None:
        validate_month(month)

    search = search or ""
    return QueryFilter(
        search=search,
        price=parse_price(search),
        page=page,
        per_page=per_page,
        month=month,
    )


def _match_conditions(query_filter: QueryFilter) -> list[ColumnElement[bool]]:
    """Build WHERE conditions for a filter."""
    text_match = [
        Transaction.title.icontains(query_filter.search, autoescape=True),
        Transaction.description.icontains(query_filter.search, autoescape=True),
    ]
    if query_filter.price is not None:
        text_match.append(Transaction.price == query_filter.price)

    conditions = [or_(*text_match)]
    if query_filter.month is not None:
        conditions.append(month_of_sale_equals(query_filter.month))
    return conditions


class TransactionQueryService:
    """Paginated search over the transactions table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_transactions(self, query_filter: QueryFilter) -> TransactionPage:
        """Return the requested page of matches and the total match count."""
        conditions = _match_conditions(query_filter)

        count_query = select(func.count()).select_from(Transaction).where(*conditions)
        page_query = (
            select(Transaction)
            .where(*conditions)
            .order_by(Transaction.id)
            .offset(query_filter.offset)
            .limit(query_filter.per_page)
        )

        try:
            total = (await self.db.execute(count_query)).scalar() or 0
            result = await self.db.execute(page_query)
            transactions = list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.exception("Error fetching transactions: %s", exc)
            raise ServiceError("Failed to fetch transactions") from exc

        logger.debug(
            "Found %d of %d transactions (month=%s, page=%d)",
            len(transactions), total, query_filter.month, query_filter.page,
        )
        return TransactionPage(
            total=total,
            page=query_filter.page,
            per_page=query_filter.per_page,
            transactions=transactions,
        )

    async def get_transaction(self, transaction_id: int) -> Transaction:
        """Get a single transaction by ID."""
        try:
            transaction = await self.db.get(Transaction, transaction_id)
        except SQLAlchemyError as exc:
            logger.exception("Error fetching transaction %s: %s", transaction_id, exc)
            raise ServiceError("Failed to fetch transaction") from exc

        if transaction is None:
            raise NotFoundError(f"Transaction with id {transaction_id} not found")
        return transaction
