"""Shared fixtures for tests: in-memory SQLite sessions, a token issuer and user factories."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_token_issuer
from app.api.v1.auth import get_auth_service
from app.core.config import settings
from app.core.database import get_db
from app.core.security import TokenConfig, TokenIssuer, hash_password
from app.main import app
from app.models import Base, BrandOwner, BrandOwnerShop, Role, User
from app.schemas.auth import Identity
from app.services.auth import AuthService

# Lowest bcrypt cost; keeps tests fast.
TEST_BCRYPT_ROUNDS = 4
TEST_PASSWORD = "secret123"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def make_issuer(
    access_ttl: timedelta = timedelta(minutes=15),
    refresh_ttl: timedelta = timedelta(days=7),
) -> TokenIssuer:
    return TokenIssuer(
        TokenConfig(
            access_secret="test-access-secret-0123456789abcdef",
            refresh_secret="test-refresh-secret-0123456789abcdef",
            access_ttl=access_ttl,
            refresh_ttl=refresh_ttl,
        )
    )


def create_user(
    db: Session,
    email: str,
    role: Role,
    phone: str,
    business_name: str | None = None,
    password: str = TEST_PASSWORD,
) -> User:
    """Insert a user directly (bypassing registration); brand owners get a profile."""
    user = User(
        email=email,
        phone=phone,
        password_hash=hash_password(password, rounds=TEST_BCRYPT_ROUNDS),
        role=role,
        first_name="Test",
        token_version=0,
    )
    if role is Role.BRAND_OWNER:
        user.brand_owner = BrandOwner(business_name=business_name or "Test Business")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def link_shop(db: Session, brand_owner: BrandOwner, shop_owner: User, active: bool = True) -> BrandOwnerShop:
    link = BrandOwnerShop(
        brand_owner_id=brand_owner.id,
        shop_owner_id=shop_owner.id,
        is_active=active,
    )
    db.add(link)
    db.commit()
    return link


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, role=user.role)


class ApiTestMixin:
    """Point the FastAPI app at a fresh SQLite database for each test."""

    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        self.db = self.session_factory()

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        def override_auth_service(db: Annotated[Session, Depends(get_db)]) -> AuthService:
            return AuthService(db, get_token_issuer(), bcrypt_rounds=TEST_BCRYPT_ROUNDS)

        self.app = app
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_auth_service] = override_auth_service
        self.prefix = settings.API_V1_PREFIX
        self.cookie_name = settings.REFRESH_COOKIE_NAME
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        self.app.dependency_overrides.clear()
        self.db.close()

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def login(self, email: str, password: str = TEST_PASSWORD) -> dict:
        response = self.client.post(self.url("/auth/login"), json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
