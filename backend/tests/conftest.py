"""
Pytest configuration and shared fixtures for the Kore test suite.

Settings are read once at import time, so the environment is prepared
before anything from kore is imported.
"""
import os
import tempfile
from typing import Generator

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["LOCAL_STORAGE_DIR"] = tempfile.mkdtemp(prefix="kore_test_storage_")
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("STORAGE_ACCESS_KEY_ID", None)
os.environ.pop("STORAGE_SECRET_ACCESS_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import kore.models  # noqa: E402,F401
from kore.database import Base, get_db  # noqa: E402
from kore.main import app  # noqa: E402
from kore.models.user import User  # noqa: E402
from kore.models.vendor import Vendor  # noqa: E402
from kore.services.security import create_access_token, get_password_hash  # noqa: E402

TEST_PASSWORD = "secret123"


@pytest.fixture
def engine():
    """Fresh in-memory database per test, shared across threads."""
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
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Provide a database session bound to the test database."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """Provide an API client whose requests use the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db: Session, email: str, role: str, name: str = None, company_name: str = None) -> User:
    user = User(
        name=name or email.split("@")[0].title(),
        email=email,
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role,
        company_name=company_name,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def superadmin(db_session) -> User:
    return make_user(db_session, "root@kore.test", "superadmin", name="Root Admin")


@pytest.fixture
def admin(db_session) -> User:
    return make_user(db_session, "admin@kore.test", "admin", name="Office Admin")


@pytest.fixture
def distributor(db_session) -> User:
    return make_user(db_session, "dist@kore.test", "distributor", name="Ravi Kumar", company_name="Ravi Footwear")


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def superadmin_headers(superadmin) -> dict:
    return auth_headers(superadmin)


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers(admin)


@pytest.fixture
def distributor_headers(distributor) -> dict:
    return auth_headers(distributor)


@pytest.fixture
def user_factory(db_session):
    """Create extra users: user_factory(email, role, ...)."""

    def factory(email, role, **kwargs):
        return make_user(db_session, email, role, **kwargs)

    return factory


@pytest.fixture
def vendor(db_session) -> Vendor:
    """A vendor that purchase orders can be raised against."""
    vendor = Vendor(display_name="Bata Supplies", company_name="Bata Supplies Pvt Ltd", currency="INR")
    db_session.add(vendor)
    db_session.commit()
    db_session.refresh(vendor)
    return vendor


@pytest.fixture
def catalog_fields() -> dict:
    """Minimal valid article payload with two variants."""
    return {
        "article_name": "Runner Pro",
        "sole_color": "Black",
        "gender": "MEN",
        "category_id": "cat-sports",
        "brand_id": "brand-kore",
        "manufacturer_company_id": "mfr-agra",
        "unit_id": "unit-pair",
        "primary_image_url": "https://cdn.example.com/runner.jpg",
        "variants": [
            {
                "item_name": "Runner-Black-6-10",
                "cost_price": 400,
                "size_qty": {"6": 4, "7": 8, "8": 8, "9": 4},
                "selling_price": 650,
                "mrp": 999,
            },
            {
                "item_name": "Runner-White-6-10",
                "sku": "RUN-WHT",
                "cost_price": 420,
                "size_qty": {"10": 6, "6": 6},
                "selling_price": 680,
                "mrp": 1049,
            },
        ],
    }


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: API tests")
