"""Transaction endpoints module."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from sales_api.endpoints.dependencies import get_query_service, get_seed_service
from sales_api.schemas.transaction import (
    InitializeResponse,
    TransactionListResponse,
    TransactionResponse,
)
from sales_api.services.seed_service import SeedService
from sales_api.services.transaction_service import (
    DEFAULT_PER_PAGE,
    TransactionQueryService,
    build_query_filter,
)
from sales_api.services.validation import parse_month_param

router = APIRouter(prefix="/api", tags=["transactions"])


@router.get("/initialize", response_model=InitializeResponse)
async def initialize_database(
    seed_service: SeedService = Depends(get_seed_service),
) -> InitializeResponse:
    """
    Re-seed the transactions table from the third-party feed.

    All existing transactions are deleted before the feed is inserted.
    """
    inserted = await seed_service.initialize()
    return InitializeResponse(
        message="Database initialized with seed data",
        inserted=inserted,
    )


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    search: str = Query("", description="Matches title/description substring or exact price"),
    page: int = Query(1, description="Page number (starts at 1)"),
    per_page: int = Query(DEFAULT_PER_PAGE, alias="perPage", description="Items per page"),
    month: Optional[str] = Query(None, description="Month of sale (1-12), any year; empty for all"),
    service: TransactionQueryService = Depends(get_query_service),
) -> TransactionListResponse:
    """
    List transactions with search, month filter and pagination.

    - **search**: case-insensitive match on title or description, or exact price
    - **month**: calendar month of the sale date, year ignored
    """
    query_filter = build_query_filter(
        search=search,
        page=page,
        per_page=per_page,
        month=parse_month_param(month),
    )
    result = await service.list_transactions(query_filter)

    return TransactionListResponse(
        total=result.total,
        page=result.page,
        perPage=result.per_page,
        transactions=[TransactionResponse.model_validate(t) for t in result.transactions],
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: int,
    service: TransactionQueryService = Depends(get_query_service),
) -> TransactionResponse:
    """Get a single transaction by ID."""
    transaction = await service.get_transaction(transaction_id)
    return TransactionResponse.model_validate(transaction)
