import jwt
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select, func

from app.main import app
from app.config import Config
from app.db.database import Database, get_session
from app.models import Product, Transaction

TEST_JWT_SECRET = "test-secret"


def make_token(**claims) -> str:
    return jwt.encode(claims, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    """Every test runs with a known signing secret."""
    monkeypatch.setattr(Config, "JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setattr(Config, "JWT_ALGORITHM", "HS256")


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token(username='cashier', role='cashier')}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token(username='admin', role='admin')}"}


@pytest.fixture
def mock_session():
    """Mock session for API tests that never reach the database."""
    mock = MagicMock()
    mock.execute = AsyncMock()
    mock.commit = AsyncMock()
    return mock


@pytest.fixture
async def client(mock_session):
    """Async test client with a mocked database session."""
    async def override_get_session():
        yield mock_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def database(tmp_path):
    """Fresh file-backed SQLite database per test.

    A file (not :memory:) so concurrent sessions get their own connections.
    """
    database = Database(url=f"sqlite:///{tmp_path / 'pos.db'}", echo=False)
    await database.connect()
    await database.create_all()
    yield database
    await database.disconnect()


@pytest.fixture
async def db_client(database):
    """Async test client wired to the real test database."""
    async def override_get_session():
        async with database.session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def add_product(database):
    """Insert a product and return its id."""
    counter = {"n": 0}

    async def _add(name="Widget", price="10.00", stock=5, barcode=None, description=None):
        counter["n"] += 1
        async with database.session() as session:
            product = Product(
                barcode=barcode or f"BC{counter['n']:06d}",
                name=name,
                price=Decimal(price),
                stock=stock,
                description=description,
            )
            session.add(product)
            await session.commit()
            return product.id

    return _add


@pytest.fixture
def stock_of(database):
    async def _stock(product_id: int) -> int:
        async with database.session() as session:
            return await session.scalar(select(Product.stock).where(Product.id == product_id))

    return _stock


@pytest.fixture
def transaction_count(database):
    async def _count() -> int:
        async with database.session() as session:
            return await session.scalar(select(func.count()).select_from(Transaction))

    return _count
