from datetime import timedelta

import pytest

from travelsage.repositories.seed import DEMO_PASSWORD
from travelsage.services import AuthGate
from travelsage.utils.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)


@pytest.fixture
def gate(container):
    return container.auth


async def test_register_logs_the_user_in(gate):
    user, session = await gate.register("alice", "wonderland1", email="alice@travelmail.com", first_name="Alice")

    assert user.password_hash != "wonderland1"
    assert session.user_id == user.id
    assert (await gate.resolve_session(session.id)).username == "alice"


async def test_register_conflicts(gate):
    with pytest.raises(ConflictError):
        await gate.register("JohnDoe", "long-enough-password")
    with pytest.raises(ConflictError):
        await gate.register("johnny", "long-enough-password", email="jane@example.com")


async def test_register_requires_a_long_enough_password(gate):
    with pytest.raises(ValidationError) as exc_info:
        await gate.register("bob", "short")
    assert exc_info.value.details["errors"][0]["field"] == "password"


async def test_login_rejects_bad_credentials(gate):
    for username, password in (("johndoe", "wrong-password"), ("nobody", DEMO_PASSWORD)):
        with pytest.raises(AuthenticationError) as exc_info:
            await gate.login(username, password)
        assert exc_info.value.message == "Invalid credentials"


async def test_logout_invalidates_the_session(gate):
    _, session = await gate.login("johndoe", DEMO_PASSWORD)
    await gate.logout(session.id)

    with pytest.raises(AuthenticationError):
        await gate.resolve_session(session.id)
    await gate.logout(session.id)
    await gate.logout(None)


async def test_missing_session(gate):
    with pytest.raises(AuthenticationError):
        await gate.resolve_session(None)
    with pytest.raises(AuthenticationError):
        await gate.resolve_session("not-a-session")


async def test_expired_session_is_rejected_and_dropped(gate):
    short_lived = AuthGate(gate.users, gate.sessions, session_ttl=timedelta(seconds=-1))
    _, session = await short_lived.login("janedoe", DEMO_PASSWORD)

    with pytest.raises(AuthenticationError) as exc_info:
        await short_lived.resolve_session(session.id)
    assert exc_info.value.message == "Session expired"
    assert await gate.sessions.get(session.id) is None


async def test_change_password(gate):
    with pytest.raises(AuthenticationError):
        await gate.change_password("user2", "not-the-password", "brand-new-password")
    with pytest.raises(ValidationError):
        await gate.change_password("user2", DEMO_PASSWORD, "tiny")

    await gate.change_password("user2", DEMO_PASSWORD, "brand-new-password")
    user, _ = await gate.login("janedoe", "brand-new-password")
    assert user.id == "user2"


async def test_update_profile(gate):
    updated = await gate.update_profile("user1", first_name="Johnny")
    assert updated.first_name == "Johnny"
    assert updated.last_name == "Doe"

    with pytest.raises(ConflictError):
        await gate.update_profile("user1", email="jane@example.com")


async def test_admin_and_ownership_checks(gate):
    john = await gate.get_user("user1")
    admin = await gate.get_user("admin1")

    with pytest.raises(AuthorizationError) as exc_info:
        AuthGate.require_admin(john)
    assert exc_info.value.message == "Admin access required"
    assert AuthGate.require_admin(admin) is admin

    AuthGate.ensure_owner(john, "user1", "itinerary")
    AuthGate.ensure_owner(admin, "user1", "itinerary")
    with pytest.raises(AuthorizationError):
        AuthGate.ensure_owner(john, "user2", "itinerary")
