"""
Report Tracker - Test Configuration and Fixtures
"""
import os

# Set testing environment before the application modules read it
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TRELLO_REFRESH_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STATIC_DIR"] = os.path.join(os.path.dirname(__file__), "no-static")

from typing import Callable, Dict, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app import app
from core.database import SessionLocal, engine
from core.dependencies import get_http_client
from models.base import Base
from models.user import UserModel
from schemas.user import User
from utils.report_manager import ReportManager
from utils.user_manager import UserManager


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Fresh tables and a session for each test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def user_manager(db_session: Session) -> UserManager:
    return UserManager(db_session)


@pytest.fixture
def report_manager(db_session: Session, user_manager: UserManager) -> ReportManager:
    return ReportManager(db_session, user_manager)


@pytest.fixture
def make_user(db_session: Session, user_manager: UserManager) -> Callable[..., User]:
    """Register a user and force the given role directly in the store."""
    counter = {"n": 0}

    def _make(role: str = "user", email: str = None, password: str = "pw") -> User:
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        user = user_manager.register(f"{role}{counter['n']}", email, password)
        if role != "user":
            db_session.query(UserModel).filter(UserModel.user_id == user.user_id).update(
                {"role": role}
            )
            db_session.commit()
            user = user.model_copy(update={"role": role})
        return user

    return _make


@pytest.fixture
def http_routes() -> Dict[str, Callable[[httpx.Request], httpx.Response]]:
    """URL -> handler map for stubbed outbound HTTP; unknown URLs get a 404."""
    return {}


@pytest.fixture
def client(db_session: Session, http_routes) -> Iterator[TestClient]:
    """Test client sharing the in-memory database, with outbound HTTP stubbed."""

    def handler(request: httpx.Request) -> httpx.Response:
        route = http_routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, json={"error": "not stubbed"})
        return route(request)

    async def override_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as ac:
            yield ac

    app.dependency_overrides[get_http_client] = override_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
