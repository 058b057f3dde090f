"""Shared fixtures: in-memory database, API client and authenticated users."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ads_api.db import get_db
from ads_api.models import Base, User
from ads_api.security.jwt import create_access_token
from ads_api.server import app

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
TENANT = "tenant-a"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


def override_get_db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_user(session, email: str, role: str = "seller", tenant_id: str = TENANT) -> User:
    user = User(tenant_id=tenant_id, email=email, password_hash="not-a-hash", role=role, is_active=True)
    session.add(user)
    session.commit()
    return user


def bearer(user: User) -> dict:
    token = create_access_token({"sub": user.id, "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seller(db_session):
    return make_user(db_session, "seller@example.com")


@pytest.fixture
def other_seller(db_session):
    return make_user(db_session, "rival@example.com")


@pytest.fixture
def admin(db_session):
    return make_user(db_session, "admin@example.com", role="admin")


@pytest.fixture
def seller_headers(seller):
    return bearer(seller)


@pytest.fixture
def other_seller_headers(other_seller):
    return bearer(other_seller)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


def campaign_payload(**overrides) -> dict:
    payload = {
        "name": "Spring sale",
        "campaign_type": "SEARCH",
        "targeting_type": "KEYWORD",
        "daily_budget": "50.00",
        "bid_amount": "1.00",
        "start_date": (datetime.now(timezone.utc) - timedelta(days=1)).isoformat(),
    }
    payload.update(overrides)
    return payload


class AdsBuilder:
    """Creates campaigns, approved ads and funded wallets through the API."""

    def __init__(self, client: TestClient, admin_headers: dict):
        self.client = client
        self.admin_headers = admin_headers

    def campaign(self, headers: dict, **overrides) -> dict:
        response = self.client.post("/ads/campaigns", json=campaign_payload(**overrides), headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    def ad(self, headers: dict, campaign_id: str, title: str, description: str, bid: str, approve: bool = True) -> dict:
        group = self.client.post(
            "/ads/ad-groups",
            json={"campaign_id": campaign_id, "name": f"{title} group", "bid_amount": bid},
            headers=headers,
        )
        assert group.status_code == 201, group.text
        response = self.client.post(
            "/ads/ads",
            json={
                "campaign_id": campaign_id,
                "ad_group_id": group.json()["id"],
                "title": title,
                "description": description,
                "landing_page_url": "https://www.shop.com/listing",
            },
            headers=headers,
        )
        assert response.status_code == 201, response.text
        ad = response.json()
        if approve:
            approved = self.client.post(f"/ads/ads/{ad['id']}/approve", headers=self.admin_headers)
            assert approved.status_code == 200, approved.text
            ad = approved.json()
        return ad

    def fund(self, seller_id: str, amount: str) -> dict:
        response = self.client.post(
            f"/ads/wallets/seller/{seller_id}",
            json={"initial_balance": amount},
            headers=self.admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    def launch(self, headers: dict, seller_id: str, title: str, description: str, bid: str, balance: str = "100.00") -> dict:
        campaign = self.campaign(headers, name=title, bid_amount=bid)
        ad = self.ad(headers, campaign["id"], title, description, bid)
        wallet = self.fund(seller_id, balance) if balance is not None else None
        return {"campaign": campaign, "ad": ad, "wallet": wallet}


@pytest.fixture
def builder(client, admin_headers):
    return AdsBuilder(client, admin_headers)
