"""Test configuration and fixtures."""

import re

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fraudcheck.database import Base, get_db
from fraudcheck.exceptions import DeliveryError
from fraudcheck.storage import FileStore, get_file_store
from fraudcheck.mail import get_mailer
# Register every table on Base.metadata
from fraudcheck import models  # noqa: F401
from fraudcheck.auth import models as auth_models  # noqa: F401


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

STUDENT = {"email": "s@x.com", "password": "Abc123!@", "role": "student"}
OTHER_STUDENT = {"email": "other@x.com", "password": "Other123!", "role": "student"}
TEACHER = {"email": "t@x.com", "password": "Teach123!", "role": "teacher"}

TEACHER_HEADERS = {"role": "teacher"}


class FakeMailer:
    """Records outgoing messages instead of talking to an SMTP server."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to_email, subject, text_content):
        if self.fail:
            raise DeliveryError("Failed to send email: connection refused")
        self.sent.append({"to": to_email, "subject": subject, "text": text_content})
        return "sender@x.com"

    def last_temp_password(self):
        match = re.search(r"temporary password is: (\w+)\.", self.sent[-1]["text"])
        return match.group(1)


@pytest.fixture(scope="session")
def engine():
    """Create test database engine."""
    return create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture(autouse=True)
def tables(engine):
    """Give every test empty tables."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def file_store(tmp_path):
    return FileStore(upload_dir=str(tmp_path / "uploads"), max_file_size=1024)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(session_factory, file_store, mailer):
    from fraudcheck.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store
    app.dependency_overrides[get_mailer] = lambda: mailer

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register an account through the API."""
    def _register(account):
        response = client.post("/register", json=account)
        assert response.status_code == 201, response.text
        return account
    return _register


@pytest.fixture
def login_token(client):
    """Log in through the API and return the access token."""
    def _login(account):
        response = client.post("/login", json=account)
        assert response.status_code == 200, response.text
        return response.json()["access_token"]
    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
