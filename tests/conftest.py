import pytest
from fastapi.testclient import TestClient

from travelsage.agents import RuleBasedResponder
from travelsage.config import Settings
from travelsage.container import Container
from travelsage.main import create_app
from travelsage.models import User
from travelsage.repositories import Repositories
from travelsage.repositories.memory import (
    InMemoryBookingRepository,
    InMemoryCatalogRepository,
    InMemoryItineraryRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from travelsage.repositories.seed import (
    DEMO_PASSWORD,
    seed_activities,
    seed_destinations,
    seed_restaurants,
    seed_users,
)
from travelsage.utils.security import hash_password

ADMIN_PASSWORD = "admin-password"


@pytest.fixture(scope="session")
def demo_users():
    """Seeded once per run; bcrypt hashing is slow"""
    admin = User(
        id="admin1",
        username="admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        email="admin@travelsage.app",
        is_admin=True,
    )
    return seed_users() + [admin]


def make_repositories(users):
    return Repositories(
        users=InMemoryUserRepository(users),
        sessions=InMemorySessionRepository(),
        itineraries=InMemoryItineraryRepository(),
        bookings=InMemoryBookingRepository(),
        catalog=InMemoryCatalogRepository(
            destinations=seed_destinations(),
            restaurants=seed_restaurants(),
            activities=seed_activities(),
        ),
    )


def make_settings(**overrides):
    values = {"ENV": "test", "STORAGE_BACKEND": "memory", "ASSISTANT_BACKEND": "rules"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def build_container(demo_users):
    """Factory for a fresh in-memory container; keyword args override settings"""
    def _build(**overrides):
        return Container.from_settings(
            make_settings(**overrides),
            repositories=make_repositories(demo_users),
            assistant=RuleBasedResponder(),
        )
    return _build


@pytest.fixture
def container(build_container):
    return build_container()


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    return TestClient(app)


def login(client, username, password=DEMO_PASSWORD):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def auth_client(app):
    """Client logged in as johndoe (user1)"""
    return login(TestClient(app), "johndoe")


@pytest.fixture
def other_client(app):
    """Client logged in as janedoe (user2)"""
    return login(TestClient(app), "janedoe")


@pytest.fixture
def admin_client(app):
    return login(TestClient(app), "admin", ADMIN_PASSWORD)
