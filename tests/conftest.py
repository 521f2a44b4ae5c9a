import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from turfconnect import rate_limiter  # noqa: E402
from turfconnect.auth import get_current_user  # noqa: E402
from turfconnect.cache import cache  # noqa: E402
from turfconnect.database import Base, get_db  # noqa: E402
from turfconnect.domain.auth.flow_store import RegistrationFlowStore, get_flow_store  # noqa: E402
from turfconnect.main import app  # noqa: E402
from turfconnect.models import Profile, Turf, TurfOwner, TurfSlot  # noqa: E402
from turfconnect.services.auth_client import get_auth_client  # noqa: E402

from tests.fakes import FakeAuthGateway, FakeRedis  # noqa: E402


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    redis = FakeRedis()
    monkeypatch.setattr(cache, "redis_client", redis)
    monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: redis)
    return redis


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def gateway():
    return FakeAuthGateway()


@pytest.fixture
def flow_store(fake_redis):
    return RegistrationFlowStore(redis_client=fake_redis)


@pytest.fixture
def customer(db):
    profile = Profile(id="customer-1", email="player@example.com", full_name="Jane Player", role="customer")
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def owner_user(db):
    profile = Profile(id="owner-1", email="owner@example.com", full_name="Olu Owner", role="turf_owner")
    db.add(profile)
    db.add(
        TurfOwner(
            id="owner-row-1",
            user_id=profile.id,
            business_name="Green Field Sports",
            owner_name="Olu Owner",
            business_type="company",
            verification_status="pending",
        )
    )
    db.commit()
    return profile


@pytest.fixture
def admin_user(db):
    profile = Profile(id="admin-1", email="admin@example.com", full_name="Ada Admin", role="admin")
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def active_turf(db, owner_user):
    turf = Turf(
        id="turf-1",
        owner_id="owner-row-1",
        name="Green Field Arena",
        address="12 Stadium Road",
        area="Koramangala",
        supported_sports=["Football", "Cricket"],
        base_price_per_hour=200,
        status="active",
    )
    db.add(turf)
    db.commit()
    return turf


@pytest.fixture
def slot(db, active_turf):
    slot = TurfSlot(
        id="slot-1",
        turf_id=active_turf.id,
        day_of_week=6,
        start_time="18:00",
        end_time="19:00",
        duration_minutes=60,
        price=500,
        is_available=True,
    )
    db.add(slot)
    db.commit()
    return slot


@pytest.fixture
def current_user():
    """Mutable holder for the user the API treats as signed in"""
    return {"user": None}


@pytest.fixture
def client(db, gateway, flow_store, current_user):
    def override_get_db():
        yield db

    def override_current_user():
        return current_user["user"]

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_current_user
    app.dependency_overrides[get_auth_client] = lambda: gateway
    app.dependency_overrides[get_flow_store] = lambda: flow_store

    yield TestClient(app)

    app.dependency_overrides.clear()
