"""Transaction model module."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sales_api.database.database import Base


class Transaction(Base):
    """Product sale transaction seeded from the third-party feed."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_transactions_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Stored as naive UTC
    date_of_sale: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
