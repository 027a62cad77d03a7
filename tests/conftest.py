"""Pytest fixtures for async SQLite test database."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from datetime import datetime
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from sales_api.app import app
from sales_api.database.database import Base, get_db
from sales_api.models.transaction import Transaction


@pytest_asyncio.fixture
async def db_session():
    """Create an in-memory SQLite async session for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def sample_transactions(db_session):
    """Create sample transactions across March, July and November of several years.

    March (5 items): sold 1, 2, 4 (50 + 168 + 999.99); not sold 3, 5.
    Item 5 costs exactly 100 and falls in no price bucket.
    """
    transactions = [
        Transaction(
            id=1,
            title="Mens Casual Slim Fit",
            description="Cotton shirt for everyday wear",
            price=Decimal("50.00"),
            category="men's clothing",
            sold=True,
            date_of_sale=datetime(2021, 3, 5, 10, 0),
        ),
        Transaction(
            id=2,
            title="Solid Gold Petite Micropave",
            description="Satisfaction guaranteed",
            price=Decimal("168.00"),
            category="jewelery",
            sold=True,
            date_of_sale=datetime(2022, 3, 12, 8, 30),
        ),
        Transaction(
            id=3,
            title="WD 2TB Elements Portable",
            description="USB 3.0 and 50% faster",
            price=Decimal("64.00"),
            category="electronics",
            sold=False,
            date_of_sale=datetime(2021, 3, 20, 16, 45),
        ),
        Transaction(
            id=4,
            title="Samsung 49-Inch Monitor",
            description="Curved gaming monitor",
            price=Decimal("999.99"),
            category="electronics",
            sold=True,
            date_of_sale=datetime(2022, 3, 28, 12, 0),
        ),
        Transaction(
            id=5,
            title="Rain Jacket Women",
            description="Lightweight, perfect for trip",
            price=Decimal("100.00"),
            category="women's clothing",
            sold=False,
            date_of_sale=datetime(2021, 3, 15, 9, 15),
        ),
        Transaction(
            id=6,
            title="Fjallraven Backpack",
            description="Fits 15 inch laptops",
            price=Decimal("109.95"),
            category="men's clothing",
            sold=True,
            date_of_sale=datetime(2021, 7, 1, 11, 0),
        ),
        Transaction(
            id=7,
            title="Opna Women's Short Sleeve",
            description="100% polyester",
            price=Decimal("7.95"),
            category="women's clothing",
            sold=False,
            date_of_sale=datetime(2022, 7, 19, 14, 20),
        ),
        Transaction(
            id=8,
            title="Pierced Owl Rose Gold",
            description="Rose gold plated",
            price=Decimal("10.99"),
            category="jewelery",
            sold=False,
            date_of_sale=datetime(2021, 11, 30, 18, 5),
        ),
    ]
    db_session.add_all(transactions)
    await db_session.commit()
    return transactions


@pytest_asyncio.fixture
async def api_client(db_session):
    """HTTP client bound to the app with the test session injected."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
