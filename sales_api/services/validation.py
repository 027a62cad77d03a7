"""Shared parameter validation and query helpers."""
import math
import re
from decimal import Decimal
from typing import Optional

from sqlalchemy import extract
from sqlalchemy.sql.elements import ColumnElement

from sales_api.exceptions.api_exception import ValidationError
from sales_api.models.transaction import Transaction

INVALID_MONTH_MESSAGE = "Invalid month. Please provide a month between 1 and 12."

# Longest leading number, e.g. "50abc" -> "50", " 1.5e2 items" -> "1.5e2"
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def validate_month(month: Optional[int]) -> int:
    """Return month if it is in 1..12, otherwise raise ValidationError."""
    if month is None or isinstance(month, bool) or not 1 <= month <= 12:
        raise ValidationError(INVALID_MONTH_MESSAGE)
    return month


def parse_month_param(raw: Optional[str]) -> Optional[int]:
    """Parse an optional month query parameter; empty means no month filter."""
    if raw is None or not raw.strip():
        return None
    try:
        month = int(raw.strip())
    except ValueError:
        raise ValidationError(INVALID_MONTH_MESSAGE) from None
    return validate_month(month)


def parse_price(search: str) -> Optional[Decimal]:
    """Parse the leading number of a search string as an exact price.

    Returns None when the text does not start with a number or the number
    is not finite (e.g. "1e999999").
    """
    match = _LEADING_NUMBER.match(search)
    if match is None:
        return None
    text = match.group(0).strip()
    if not math.isfinite(float(text)):
        return None
    return Decimal(text)


def month_of_sale_equals(month: int) -> ColumnElement[bool]:
    """Match the calendar month of date_of_sale, ignoring the year."""
    return extract("month", Transaction.date_of_sale) == month
