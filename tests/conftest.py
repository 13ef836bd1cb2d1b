import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import Base, get_db
from app.core.deps import get_auth_service
from app.main import app
from app.services.auth import AuthService
from tests.helpers import ADMIN_PASSWORD


@pytest.fixture
def test_settings():
    return Settings(
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SUPABASE_URL="https://project.supabase.co",
        SUPABASE_ANON_KEY="anon-key",
        STRIPE_SECRET_KEY="sk_test_123",
        SITE_URL="https://ibadah.example",
    )


@pytest.fixture
def db_session():
    """In-memory SQLite database shared by every connection of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session, test_settings):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_auth_service] = lambda: AuthService(test_settings)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
