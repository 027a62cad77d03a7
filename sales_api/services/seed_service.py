"""Seed service module.

Replaces the whole transactions table with the records of the
third-party JSON feed (delete-all + bulk insert, no merging).
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

import httpx
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.exceptions.api_exception import ServiceError
from sales_api.models.transaction import Transaction
from sales_api.schemas.transaction import SeedRecord
from sales_api.settings import settings

logger = logging.getLogger(__name__)


def _to_naive_utc(value: datetime) -> datetime:
    """Normalise an offset-aware timestamp to naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def record_to_transaction(raw: dict[str, Any]) -> Transaction:
    """Convert one feed record into a Transaction row.

    Raises:
        pydantic.ValidationError: If the record is missing fields or has bad values.
    """
    record = SeedRecord.model_validate(raw)
    return Transaction(
        id=record.id,
        title=record.title,
        description=record.description,
        price=Decimal(str(record.price)),
        category=record.category,
        image=record.image,
        sold=record.sold,
        date_of_sale=_to_naive_utc(record.date_of_sale),
    )


class SeedService:
    """Fetches the feed and reseeds the transactions table."""

    def __init__(
        self,
        db: AsyncSession,
        http_client: Optional[httpx.AsyncClient] = None,
        source_url: Optional[str] = None,
    ):
        self.db = db
        self.http_client = http_client
        self.source_url = source_url or settings.SEED_SOURCE_URL

    async def fetch_records(self) -> list[dict[str, Any]]:
        """Download the feed as a list of raw records."""
        try:
            if self.http_client is not None:
                response = await self.http_client.get(self.source_url)
            else:
                async with httpx.AsyncClient(timeout=settings.SEED_TIMEOUT_SECONDS) as client:
                    response = await client.get(self.source_url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch seed data from %s: %s", self.source_url, exc)
            raise ServiceError("Failed to fetch or initialize data") from exc

        if not isinstance(payload, list):
            logger.error("Seed feed %s did not return a list", self.source_url)
            raise ServiceError("Failed to fetch or initialize data")
        return payload

    async def initialize(self) -> int:
        """Replace all transactions with the feed contents.

        Returns:
            Number of transactions inserted.
        """
        records = await self.fetch_records()

        try:
            transactions = [record_to_transaction(raw) for raw in records]
        except (SchemaValidationError, TypeError) as exc:
            logger.error("Malformed seed record: %s", exc)
            raise ServiceError("Failed to fetch or initialize data") from exc

        try:
            await self.db.execute(delete(Transaction))
            self.db.expunge_all()
            self.db.add_all(transactions)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception("Failed to reseed transactions: %s", exc)
            raise ServiceError("Failed to fetch or initialize data") from exc

        logger.info("Seeded %d transaction(s) from %s", len(transactions), self.source_url)
        return len(transactions)
