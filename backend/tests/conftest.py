"""
Pytest configuration and fixtures for backend tests.
"""

import os

# In-memory SQLite for the whole test run; must be set before settings load
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import itertools
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from menu_api.main import app
from menu_api.models import Base, FamilyGroup, FamilyMember, Menu, Recipe, User
from menu_api.services.permissions import Principal
from shared.config.constants import FamilyRoles, MenuStatus
from shared.infrastructure.db import create_db_engine, get_db
from shared.security.auth import sign_access_token
from shared.security.password import hash_password
from shared.security.rate_limit import limiter
from shared.utils.validators import serialize_json_list


TEST_PASSWORD = "testpass123"

# Hashing is slow by design; hash the shared test password once
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)

_name_counter = itertools.count(1)

# Separate from the app engine, which the lifespan disposes on shutdown
engine = create_db_engine("sqlite://")
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    Rate limit counters start from zero for every test.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_user(db_session):
    """Create a user; the password is always TEST_PASSWORD."""
    def _make(user_name: str | None = None, name: str = "Test User") -> User:
        user = User(
            user_name=user_name or f"user{next(_name_counter)}",
            name=name,
            password_hash=TEST_PASSWORD_HASH,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def make_recipe(db_session):
    def _make(
        creator: User,
        family_group: FamilyGroup | None = None,
        name: str = "Tomato Egg Stir-fry",
        **values,
    ) -> Recipe:
        values.setdefault("category", "VEGETABLE")
        values.setdefault("difficulty", "EASY")
        recipe = Recipe(
            name=name,
            ingredients=serialize_json_list(values.pop("ingredients", [])),
            steps=serialize_json_list(values.pop("steps", [])),
            tags=serialize_json_list(values.pop("tags", [])),
            created_by=creator.id,
            family_group_id=family_group.id if family_group else None,
            **values,
        )
        db_session.add(recipe)
        db_session.commit()
        return recipe

    return _make


@pytest.fixture
def make_menu(db_session):
    def _make(
        creator: User,
        family_group: FamilyGroup | None = None,
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2024, 1, 7),
        name: str = "Week One",
    ) -> Menu:
        menu = Menu(
            name=name,
            type="WEEKLY",
            start_date=start_date,
            end_date=end_date,
            status=MenuStatus.PUBLISHED,
            created_by=creator.id,
            family_group_id=family_group.id if family_group else None,
        )
        db_session.add(menu)
        db_session.commit()
        return menu

    return _make


# =============================================================================
# Scenario fixtures: alice and bob share a family group, carol is an outsider
# =============================================================================


@pytest.fixture
def alice(make_user):
    return make_user("alice", "Alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob", "Bob")


@pytest.fixture
def carol(make_user):
    return make_user("carol", "Carol")


@pytest.fixture
def family_group(db_session, alice, bob):
    """Group G: alice is admin, bob is a member."""
    group = FamilyGroup(name="The Smiths")
    group.members.append(FamilyMember(user_id=alice.id, role=FamilyRoles.ADMIN))
    group.members.append(FamilyMember(user_id=bob.id, role=FamilyRoles.MEMBER))
    db_session.add(group)
    db_session.commit()
    return group


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, user_name=user.user_name)


def auth_headers_for(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {sign_access_token(user.id, user.user_name)}"}


@pytest.fixture
def alice_headers(alice):
    return auth_headers_for(alice)


@pytest.fixture
def bob_headers(bob):
    return auth_headers_for(bob)


@pytest.fixture
def carol_headers(carol):
    return auth_headers_for(carol)
