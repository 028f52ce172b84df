"""Pytest fixtures for API testing."""
import os

# The application engine is built at import time; keep it off PostgreSQL.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from traffic_ops_api.main import app
from traffic_ops_api.core.database import enable_sqlite_foreign_keys, get_db
from traffic_ops_api.core.security import get_password_hash, create_access_token
from traffic_ops_api.crud.interfaces import APIInfo
from traffic_ops_api.models.base import Base
from traffic_ops_api.models.user import TmUser
from traffic_ops_api.models.deliveryservice_request import DeliveryServiceRequest
from traffic_ops_api.models.deliveryservice_request_comment import DeliveryServiceRequestComment

# In-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

COMMENTS_URL = "/deliveryservice_requests/comments"


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client with database override.

    Note: db_session already created tables, so we don't need to create them again.
    """
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_user(db_session, username: str, password: str = "testpass123") -> TmUser:
    user = TmUser(
        username=username,
        full_name=username.title(),
        email=f"{username}@example.com",
        local_passwd=get_password_hash(password),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def author_user(db_session):
    """The user who writes comments."""
    return make_user(db_session, "alice")


@pytest.fixture
def other_user(db_session):
    """A second user who is not the author of any fixture comment."""
    return make_user(db_session, "bob")


@pytest.fixture
def auth_headers(author_user):
    """Authorization headers for the author."""
    token = create_access_token(author_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(other_user):
    """Authorization headers for the non-author."""
    token = create_access_token(other_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ds_request(db_session, author_user):
    """A draft request to create delivery service 'demo1'."""
    dsr = DeliveryServiceRequest(
        author_id=author_user.id,
        change_type="create",
        status="draft",
        deliveryservice={"xmlId": "demo1", "displayName": "Demo 1"},
    )
    db_session.add(dsr)
    db_session.commit()
    db_session.refresh(dsr)
    return dsr


@pytest.fixture
def second_ds_request(db_session, other_user):
    """A request to update delivery service 'demo2'."""
    dsr = DeliveryServiceRequest(
        author_id=other_user.id,
        change_type="update",
        status="submitted",
        deliveryservice={"xmlId": "demo2"},
    )
    db_session.add(dsr)
    db_session.commit()
    db_session.refresh(dsr)
    return dsr


@pytest.fixture
def comment(db_session, author_user, ds_request):
    """A comment by the author on the demo1 request."""
    c = DeliveryServiceRequestComment(
        author_id=author_user.id,
        deliveryservice_request_id=ds_request.id,
        value="looks good",
    )
    db_session.add(c)
    db_session.commit()
    db_session.refresh(c)
    return c


@pytest.fixture
def api_info(db_session, author_user):
    """Request context for calling resources directly, as the author."""
    return APIInfo(user=author_user, tx=db_session, params={})
