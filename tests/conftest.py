"""Shared fixtures: an isolated in-memory database per test and data factories."""

import os

# Must be set before config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Optional

import pytest
import pytz
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from api.routes.auth import create_access_token
from app import app
from core.database import build_engine, get_db
from models.access_code import AccessCodeModel
from models.base import Base
from models.class_model import ClassModel
from models.teacher import TeacherModel
from models.user import UserModel
from utils.converters import model_to_user
from utils.user_manager import UserManager

DEFAULT_PASSWORD = "secret123"


def _now() -> str:
    return datetime.now(pytz.utc).isoformat()


@pytest.fixture
def engine():
    db_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db) -> Callable[..., UserModel]:
    hasher = UserManager(db)

    def _make_user(
        email: Optional[str] = None,
        role: str = "student",
        user_id: Optional[int] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test User",
    ) -> UserModel:
        model = UserModel(
            id=user_id,
            email=email or f"user{db.query(UserModel).count() + 1}@example.com",
            password_hash=hasher.hash_password(password),
            name=name,
            role=role,
            created_at=_now(),
        )
        db.add(model)
        db.commit()
        db.refresh(model)
        return model

    return _make_user


@pytest.fixture
def make_teacher(db) -> Callable[..., TeacherModel]:
    def _make_teacher(name: str = "Dr. Smith", subject: str = "Physics") -> TeacherModel:
        model = TeacherModel(name=name, subject=subject, bio="", created_at=_now())
        db.add(model)
        db.commit()
        db.refresh(model)
        return model

    return _make_teacher


@pytest.fixture
def make_class(db, make_teacher) -> Callable[..., ClassModel]:
    def _make_class(
        class_id: Optional[int] = None,
        price: Decimal = Decimal("0"),
        title: str = "Mechanics",
        teacher: Optional[TeacherModel] = None,
    ) -> ClassModel:
        teacher = teacher or make_teacher()
        model = ClassModel(
            id=class_id,
            title=title,
            teacher_id=teacher.id,
            price=price,
            is_free=Decimal(price) == 0,
            created_at=_now(),
        )
        db.add(model)
        db.commit()
        db.refresh(model)
        return model

    return _make_class


@pytest.fixture
def make_code(db) -> Callable[..., AccessCodeModel]:
    def _make_code(class_model: ClassModel, code: str = "ABC12345") -> AccessCodeModel:
        model = AccessCodeModel(
            code=code,
            class_id=class_model.id,
            price=class_model.price,
            is_used=False,
            created_at=_now(),
        )
        db.add(model)
        db.commit()
        db.refresh(model)
        return model

    return _make_code


@pytest.fixture
def auth_headers() -> Callable[[UserModel], Dict[str, str]]:
    def _auth_headers(user: UserModel) -> Dict[str, str]:
        token = create_access_token(model_to_user(user))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def admin(make_user) -> UserModel:
    return make_user(email="admin@example.com", role="admin", name="Administrator")
