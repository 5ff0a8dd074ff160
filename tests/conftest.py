"""
Shared pytest fixtures for dashboard tests.
Each test gets its own file-backed SQLite database.
"""

from datetime import datetime
from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from bookstore.models import Base, Book, Member, Order, OrderDetail, Sale, SaleDetail
from bookstore.main import app
from bookstore.modules.dashboard import DashboardService, get_ai_client, get_dashboard_service


class FakeAIClient:
    """Records prompts instead of calling the provider."""

    def __init__(self, text: str = "analysis text", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def service(session_factory):
    return DashboardService(session_factory, max_concurrency=4)


@pytest.fixture
def seed(session_factory):
    """Insert ORM objects and commit them."""

    async def _seed(*objects):
        async with session_factory() as session:
            session.add_all(objects)
            await session.commit()

    return _seed


@pytest.fixture
def ai_client():
    return FakeAIClient()


@pytest.fixture
async def client(service, ai_client):
    """API client wired to the test database and the fake AI client."""
    app.dependency_overrides[get_dashboard_service] = lambda: service
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def bookstore_data(seed):
    """
    A small store:
      - books 1 (novel), 2 (comic), 3 (novel), 4 (no category)
      - 2024 online orders in Jan and Mar, one cancelled order in Jan
      - 2024 in-store sales in Jan and Feb, one 2023 sale
    """
    novel = Book(id=1, name="Novel A", image="a.png", category="novel", price=300)
    comic = Book(id=2, name="Comic B", image=None, category="comic", price=120)
    novel_c = Book(id=3, name="Novel C", image="c.png", category="novel", price=250)
    plain = Book(id=4, name="Plain D", category=None, price=99)

    members = [Member(id=1, name="Somchai"), Member(id=2, name="Suda")]

    jan_order = Order(id=1, member_id=1, status="paid", created_at=datetime(2024, 1, 15, 10, 0))
    cancelled = Order(id=2, member_id=2, status="cancel", created_at=datetime(2024, 1, 20, 9, 0))
    mar_order = Order(id=3, member_id=2, status="pending", created_at=datetime(2024, 3, 2, 18, 30))

    order_details = [
        OrderDetail(order_id=1, book_id=1, price=600, qty=2),
        OrderDetail(order_id=1, book_id=2, price=120, qty=1),
        OrderDetail(order_id=2, book_id=3, price=2500, qty=10),
        OrderDetail(order_id=3, book_id=3, price=250, qty=1),
    ]

    jan_sale = Sale(id=1, total=360, created_at=datetime(2024, 1, 15, 14, 0))
    feb_sale = Sale(id=2, total=300, created_at=datetime(2024, 2, 29, 11, 0))
    old_sale = Sale(id=3, total=1000, created_at=datetime(2023, 12, 31, 23, 0))

    sale_details = [
        SaleDetail(sale_id=1, book_id=2, price=360, qty=3),
        SaleDetail(sale_id=2, book_id=1, price=300, qty=1),
        SaleDetail(sale_id=3, book_id=4, price=1000, qty=10),
    ]

    await seed(novel, comic, novel_c, plain, *members)
    await seed(jan_order, cancelled, mar_order, jan_sale, feb_sale, old_sale)
    await seed(*order_details, *sale_details)
