
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from apps.auth.models import UserModel
from apps.auth.services import get_current_user
from core.config import Settings, get_settings
from core.database import Base, get_db


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings():
    return Settings(SECRET_KEY="test-secret", ALLOW_OVERPAYMENT=True, EXPIRY_WARNING_DAYS=30)


@pytest.fixture
def admin_user(db):
    user = UserModel(name="Admin", email="admin@example.com", hashed_password="not-used", is_admin=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def anonymous_client(db, settings):
    """Client with a test database but real authentication."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(anonymous_client, admin_user):
    app.dependency_overrides[get_current_user] = lambda: admin_user
    return anonymous_client
