"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from venue_ledger.api.main import create_app
from venue_ledger.config import settings
from venue_ledger.domain.ledger import Ledger
from venue_ledger.domain.models import Account, LedgerLimits
from venue_ledger.domain.rules import RulesEngine
from venue_ledger.infrastructure.database.models import Base
from venue_ledger.infrastructure.database.session import get_db
from venue_ledger.infrastructure.security import hash_password
from venue_ledger.services.account_service import AccountService
from venue_ledger.services.auth_service import AuthService
from venue_ledger.services.locks import AccountLockRegistry


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2026, 3, 14)
ADMIN_PASSWORD = "admin-secret"


class FakeClock:
    """Settable local date for midnight-reset tests"""

    def __init__(self, today: date = TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def limits() -> LedgerLimits:
    return LedgerLimits(daily_deposit_limit=10_000, max_deposited_balance=50_000, multiplier_factor=3)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rules(limits: LedgerLimits, clock: FakeClock) -> RulesEngine:
    return RulesEngine(limits, today=clock)


@pytest.fixture
def make_ledger(rules: RulesEngine) -> Callable[..., Ledger]:
    """Build a ledger over a fresh account with the given balances"""

    def _make(deposited: int = 0, promotional: int = 0, deposited_today: int = 0, deposited_on: date | None = TODAY):
        account = Account(
            account_id="acct-1",
            deposited_balance=deposited,
            promotional_balance=promotional,
            deposited_today=deposited_today,
            deposited_on=deposited_on,
        )
        return rules.open_ledger(account)

    return _make


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db: Session) -> sessionmaker:
    """Independent sessions on the test database, one per simulated request"""
    return TestingSessionLocal


@pytest.fixture
def account_service(db: Session, rules: RulesEngine) -> AccountService:
    return AccountService(db, rules, AccountLockRegistry(), request_id="test")


@pytest.fixture
def open_account(db: Session) -> Callable[..., str]:
    """Open an account and return its ID"""

    def _open(username: str = "guest", password: str = "guest-password") -> str:
        return AuthService(db).open_account(username, password).account_id

    return _open


@pytest.fixture
def admin_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "admin_password_hash", hash_password(ADMIN_PASSWORD))


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def admin_headers(client: TestClient, admin_enabled) -> dict:
    response = client.post("/v1/admin/sessions", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
