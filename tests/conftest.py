import itertools
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.config import get_settings
from app.core.security import create_access_token
from app.crud import crud_category, crud_post, crud_user
from app.database import Base
from app.init_db import init_db
from app.main import app
from app.models.user import AccountStatus, UserRole
from app.schemas.category import CategoryCreate
from app.schemas.post import PostCreate
from app.schemas.user import UserCreate

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
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


@pytest.fixture
def make_user(db_session):
    counter = itertools.count(1)

    def _make_user(username=None, *, role=UserRole.USER, status=AccountStatus.ACTIVE, password=PASSWORD):
        username = username or f"user{next(counter)}"
        user_in = UserCreate(username=username, email=f"{username}@example.com", password=password)
        user = crud_user.create_user(db_session, user_in=user_in, role=role)
        if status != AccountStatus.ACTIVE:
            user = crud_user.set_status(db_session, db_obj=user, status=status)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token({"sub": str(user.id), "email": user.email}, get_settings())
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def make_post(db_session):
    def _make_post(author, title="Hello World", *, is_published=True, category_id=None, content="Body"):
        post_in = PostCreate(
            title=title,
            content=content,
            is_published=is_published,
            category_id=category_id,
        )
        return crud_post.create_post(db_session, author=author, post_in=post_in)

    return _make_post


@pytest.fixture
def make_category(db_session):
    def _make_category(name="Python", description=None):
        return crud_category.create_category(
            db_session, category_in=CategoryCreate(name=name, description=description)
        )

    return _make_category
