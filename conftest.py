"""Shared pytest fixtures for the storefront API tests.

Each test gets its own SQLite database file so concurrent sessions (the
dashboard opens one per query) see the same committed data. External
collaborators are replaced with in-memory fakes through FastAPI
dependency overrides.
"""

from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, date, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.core.database import Base, get_db, get_session_maker
from app.core.exceptions import UpstreamFailureError
from app.features.payments.gateway import PaymentGateway, get_payment_gateway
from app.features.products.storage import ObjectStorage, Photo, PhotoUpload, get_object_storage
from app.features.records.models import Coupon, Order, Product, Review, User
from app.main import app


class FakeStorage(ObjectStorage):
    """In-memory photo storage recording every call."""

    def __init__(self, configured: bool = True) -> None:
        self.configured = configured
        self.uploaded: list[PhotoUpload] = []
        self.deleted: list[str] = []
        self.fail_deletes: set[str] = set()

    def is_configured(self) -> bool:
        return self.configured

    async def upload(self, files: Sequence[PhotoUpload]) -> list[Photo]:
        photos = []
        for file in files:
            self.uploaded.append(file)
            public_id = f"products/{len(self.uploaded)}-{file.filename}"
            photos.append(Photo(url=f"https://cdn.test/{public_id}", public_id=public_id))
        return photos

    async def delete(self, public_ids: Sequence[str]) -> None:
        if self.fail_deletes.intersection(public_ids):
            raise UpstreamFailureError("Photo Delete Failed")
        self.deleted.extend(public_ids)


class FakeGateway(PaymentGateway):
    """Payment gateway returning a fixed client secret."""

    client_secret = "pi_test_secret_123"

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        description: str,
        metadata: dict[str, str],
        shipping: dict[str, Any],
    ) -> str:
        self.calls.append(
            {
                "amount": amount,
                "currency": currency,
                "description": description,
                "metadata": metadata,
                "shipping": shipping,
            }
        )
        return self.client_secret


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Run every test with testing settings and fresh cached settings."""
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("LOG_FORMAT", "console")
    monkeypatch.setenv("CLOUD_NAME", "test-cloud")
    monkeypatch.setenv("CLOUD_API_KEY", "test-key")
    monkeypatch.setenv("CLOUD_API_SECRET", "test-secret")
    monkeypatch.setenv("STRIPE_KEY", "sk_test_123")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


def _enable_foreign_keys(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine(tmp_path):
    """SQLite database file with every table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}")
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    """Session for seeding and inspecting the test database."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def client(session_maker, fake_storage, fake_gateway):
    """Async HTTP client with the database and external services overridden."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_maker] = lambda: session_maker
    app.dependency_overrides[get_object_storage] = lambda: fake_storage
    app.dependency_overrides[get_payment_gateway] = lambda: fake_gateway

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Record factories
# =============================================================================


@pytest.fixture
def make_product(db_session) -> Callable[..., Awaitable[Product]]:
    """Factory persisting a product."""

    async def _make(
        name: str = "Laptop",
        price: float = 500,
        stock: int = 10,
        category: str = "electronics",
        created_at: datetime | None = None,
        **kwargs: Any,
    ) -> Product:
        product = Product(
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=kwargs.pop("description", f"{name} description"),
            photos=kwargs.pop(
                "photos",
                [{"url": f"https://cdn.test/{name}.png", "public_id": f"products/{name}"}],
            ),
            **kwargs,
        )
        if created_at is not None:
            product.created_at = created_at
        db_session.add(product)
        await db_session.commit()
        return product

    return _make


@pytest.fixture
def make_user(db_session) -> Callable[..., Awaitable[User]]:
    """Factory persisting a user."""
    counter = {"n": 0}

    async def _make(
        name: str = "Asha",
        role: str = "user",
        gender: str | None = "female",
        dob: date | None = date(1995, 6, 15),
        created_at: datetime | None = None,
    ) -> User:
        counter["n"] += 1
        user = User(
            name=name,
            email=f"{name.lower()}{counter['n']}@example.com",
            role=role,
            gender=gender,
            dob=dob,
        )
        if created_at is not None:
            user.created_at = created_at
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def make_order(db_session) -> Callable[..., Awaitable[Order]]:
    """Factory persisting an order."""

    async def _make(
        total: float = 1180,
        subtotal: float = 1000,
        tax: float = 180,
        shipping_charges: float = 0,
        discount: float = 0,
        status: str = "Processing",
        items: int = 1,
        user: User | None = None,
        created_at: datetime | None = None,
    ) -> Order:
        order = Order(
            user_id=user.id if user else None,
            shipping_info={"address": "1 Main St", "city": "Pune", "pinCode": 411001},
            subtotal=subtotal,
            tax=tax,
            shipping_charges=shipping_charges,
            discount=discount,
            total=total,
            status=status,
            order_items=[
                {"name": f"item-{i}", "price": 100, "quantity": 1, "productId": f"p{i}"}
                for i in range(items)
            ],
        )
        if created_at is not None:
            order.created_at = created_at
        db_session.add(order)
        await db_session.commit()
        return order

    return _make


@pytest.fixture
def make_review(db_session) -> Callable[..., Awaitable[Review]]:
    """Factory persisting a review (ratings are not recomputed)."""

    async def _make(product: Product, user: User, rating: int = 4, comment: str = "") -> Review:
        review = Review(
            rating=rating,
            comment=comment,
            product_id=product.id,
            user_id=user.id,
        )
        db_session.add(review)
        await db_session.commit()
        return review

    return _make


@pytest.fixture
def make_coupon(db_session) -> Callable[..., Awaitable[Coupon]]:
    """Factory persisting a coupon."""

    async def _make(code: str = "SAVE100", amount: int = 100) -> Coupon:
        coupon = Coupon(code=code, amount=amount)
        db_session.add(coupon)
        await db_session.commit()
        return coupon

    return _make


@pytest.fixture
def fixed_now() -> datetime:
    """Reference instant for period and series tests."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=UTC)
