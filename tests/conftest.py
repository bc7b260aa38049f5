"""Shared fixtures: in-memory database, fake mail transport, API client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CRON_SECRET", "test-cron-secret")
os.environ.setdefault("AUTH_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("PORTAL_BASE_URL", "https://crm.example.com")
os.environ.setdefault("REMINDER_ENABLED", "false")

import smtplib
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bidtracker.api.deps import Principal, get_current_principal
from bidtracker.db import get_db
from bidtracker.main import app
from bidtracker.models import Base, Bid, BidStatus, Client, TenantSettings
from bidtracker.services.dispatcher import NotificationDispatcher
from bidtracker.services.email_service import EmailService

TENANT = "tenant-a"
OTHER_TENANT = "tenant-b"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


class FakeTransport:
    """Records messages instead of talking to a mail server."""

    def __init__(self, outbox: list, error: Exception | None = None):
        self.outbox = outbox
        self.error = error

    def send(self, message):
        if self.error is not None:
            raise self.error
        self.outbox.append(message)


class FakeMailServer:
    """Transport factory handed to the dispatcher."""

    def __init__(self):
        self.outbox = []
        self.error: Exception | None = None
        self.settings_seen = []

    def __call__(self, mail):
        self.settings_seen.append(mail)
        return FakeTransport(self.outbox, self.error)

    def fail_with(self, error: Exception = None):
        self.error = error or smtplib.SMTPServerDisconnected("Connection unexpectedly closed")


@pytest.fixture
def mail_server():
    return FakeMailServer()


@pytest.fixture
def mailer(mail_server):
    return EmailService(dispatcher=NotificationDispatcher(transport_factory=mail_server))


@pytest.fixture
def make_client(db):
    async def _make(tenant_id: str = TENANT, **overrides) -> Client:
        values = {
            "name": "Ana",
            "company": "Acme Ltda",
            "email": "ana@acme.com",
            "contract_value": Decimal("1500.00"),
            "commission_rate": Decimal("10"),
            "is_active": True,
        }
        values.update(overrides)
        client = Client(tenant_id=tenant_id, **values)
        db.add(client)
        await db.commit()
        await db.refresh(client)
        return client

    return _make


@pytest.fixture
def make_bid(db):
    async def _make(client: Client, deadline: date, **overrides) -> Bid:
        values = {
            "title": "Road maintenance 2026",
            "status": BidStatus.PENDING,
            "notified": False,
            "commission_rate": client.commission_rate,
            "attachments": [],
        }
        values.update(overrides)
        bid = Bid(tenant_id=client.tenant_id, client_id=client.id, deadline=deadline, **values)
        db.add(bid)
        await db.commit()
        await db.refresh(bid)
        return bid

    return _make


@pytest.fixture
def make_settings(db):
    async def _make(tenant_id: str = TENANT, **overrides) -> TenantSettings:
        values = {
            "smtp_host": "smtp.example.com",
            "smtp_port": 587,
            "smtp_user": "consultant@example.com",
            "smtp_password": "app-password",
            "sender_name": "Bid Desk",
        }
        values.update(overrides)
        row = TenantSettings(tenant_id=tenant_id, **values)
        db.add(row)
        await db.commit()
        await db.refresh(row)
        return row

    return _make


class PrincipalHolder:
    """Mutable identity returned by the overridden auth dependency."""

    def __init__(self):
        self.principal = Principal(user_id=TENANT, email="consultant@example.com")

    def login(self, user_id: str, email: str | None = None):
        self.principal = Principal(user_id=user_id, email=email)


@pytest.fixture
def auth():
    return PrincipalHolder()


@pytest.fixture
async def api(session_factory, auth):
    """API client bound to the test database and an authenticated consultant."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_principal():
        return auth.principal

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_principal] = override_principal

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def at(day: date, hour: int = 9) -> datetime:
    """Reference 'now' on a given day (UTC)."""
    return datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)
