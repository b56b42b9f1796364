import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from main import app
from loangate.core.db import get_session
from loangate.models.domain_models import EmploymentStatus, FraudStatus, Role, User
from loangate.services.jwt_service import create_access_token
from loangate.services.password_service import hash_password


@pytest.fixture
def engine():
    # in-memory SQLite shared across the TestClient threadpool
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    yield eng
    SQLModel.metadata.drop_all(eng)


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email, role=Role.USER, **fields):
        user = User(
            name=fields.pop("name", email.split("@")[0].title()),
            email=email,
            password_hash=hash_password("password1"),
            role=role,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


def auth_headers(user):
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role=Role.ADMIN)


@pytest.fixture
def penny(make_user):
    # proceed_with_caution: DTI exactly 40%
    return make_user(
        "penny@example.com",
        address={"street": "456 Borderline Blvd", "city": "Maybeburg", "state": "OH", "zip_code": "43004"},
        employment_status=EmploymentStatus.EMPLOYED,
        monthly_income=6250,
        monthly_debt=2500,
        credit_score=680,
        fraud_status=FraudStatus.LOW,
    )
