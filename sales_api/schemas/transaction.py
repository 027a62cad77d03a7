"""Transaction schemas module."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionResponse(BaseModel):
    """Schema for transaction response."""

    id: int = Field(..., description="Transaction ID")
    title: str = Field(..., description="Product title")
    description: str = Field("", description="Product description")
    price: float = Field(..., ge=0, description="Sale price")
    category: str = Field(..., description="Product category")
    image: Optional[str] = Field(None, description="Product image URL")
    sold: bool = Field(..., description="Whether the product was sold")
    date_of_sale: datetime = Field(
        ...,
        alias="dateOfSale",
        description="Sale timestamp (UTC)",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class TransactionListResponse(BaseModel):
    """Schema for paginated transaction list response."""

    total: int = Field(..., description="Number of transactions matching the filter")
    page: int = Field(..., description="Current page number")
    per_page: int = Field(..., alias="perPage", description="Number of items per page")
    transactions: list[TransactionResponse] = Field(
        default_factory=list, description="Transactions on this page"
    )

    model_config = ConfigDict(populate_by_name=True)


class SeedRecord(BaseModel):
    """One record of the third-party transaction feed."""

    id: Optional[int] = None
    title: str
    description: str = ""
    price: float = Field(..., ge=0)
    category: str
    image: Optional[str] = None
    sold: bool = False
    date_of_sale: datetime = Field(..., alias="dateOfSale")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class InitializeResponse(BaseModel):
    """Schema for the seed operation response."""

    message: str = Field(..., description="Operation result message")
    inserted: int = Field(..., description="Number of transactions inserted")
