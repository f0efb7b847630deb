import os
import uuid
from datetime import timedelta
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from loyalty_ledger.db import Base, get_db, utcnow
from loyalty_ledger.deps.auth import Caller, get_caller
from loyalty_ledger.main import app
from loyalty_ledger.models.campaign import Campaign
from loyalty_ledger.models.loyalty_level import LoyaltyLevel
from loyalty_ledger.models.reward import Reward
from loyalty_ledger.models.transaction import Transaction
from loyalty_ledger.models.user import User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def caller():
    return Caller(id=uuid.uuid4(), email="member@example.com")


@pytest.fixture
def client(session_factory, caller):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_caller] = lambda: caller

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_level(db):
    def _make(name="Bronze", min_points=0, bonus_multiplier="1.0", description=None):
        level = LoyaltyLevel(
            name=name,
            min_points=min_points,
            bonus_multiplier=Decimal(str(bonus_multiplier)),
            description=description,
        )
        db.add(level)
        db.commit()
        db.refresh(level)
        return level

    return _make


@pytest.fixture
def make_user(db, caller):
    def _make(points=0, level=None, user_id=None, full_name="Test Member"):
        user_id = user_id or caller.id
        user = User(
            id=user_id,
            email=f"{user_id}@example.com",
            full_name=full_name,
            points=points,
            loyalty_level_id=level.id if level else None,
        )
        db.add(user)
        if points:
            # opening balance keeps the ledger sum equal to the balance
            db.add(Transaction(user_id=user_id, type="earned", amount=points, description="Opening balance"))
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_reward(db):
    def _make(name="Coffee", points_cost=100, is_available=True, stock=None, description=None):
        reward = Reward(
            name=name,
            description=description,
            points_cost=points_cost,
            is_available=is_available,
            stock=stock,
        )
        db.add(reward)
        db.commit()
        db.refresh(reward)
        return reward

    return _make


@pytest.fixture
def make_campaign(db):
    def _make(name="Double weekend", bonus_points=100, is_active=True, starts_in_days=-1, ends_in_days=1):
        now = utcnow()
        campaign = Campaign(
            name=name,
            bonus_points=bonus_points,
            is_active=is_active,
            start_date=now + timedelta(days=starts_in_days),
            end_date=now + timedelta(days=ends_in_days),
        )
        db.add(campaign)
        db.commit()
        db.refresh(campaign)
        return campaign

    return _make
