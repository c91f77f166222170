"""Persistence layer: repository interfaces and their memory/Supabase implementations"""
import logging
from dataclasses import dataclass

from .base import (
    BookingRepository,
    CatalogRepository,
    ItineraryRepository,
    SessionRepository,
    UserRepository,
)
from .memory import (
    InMemoryBookingRepository,
    InMemoryCatalogRepository,
    InMemoryItineraryRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from .seed import seed_activities, seed_destinations, seed_restaurants, seed_users

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    users: UserRepository
    sessions: SessionRepository
    itineraries: ItineraryRepository
    bookings: BookingRepository
    catalog: CatalogRepository


def build_memory_repositories(seed_demo_data: bool = True) -> Repositories:
    """
    Fresh per-process repositories

    The catalog is always seeded (it has no create path); demo users only
    when ``seed_demo_data`` is set.
    """
    return Repositories(
        users=InMemoryUserRepository(seed_users() if seed_demo_data else ()),
        sessions=InMemorySessionRepository(),
        itineraries=InMemoryItineraryRepository(),
        bookings=InMemoryBookingRepository(),
        catalog=InMemoryCatalogRepository(
            destinations=seed_destinations(),
            restaurants=seed_restaurants(),
            activities=seed_activities(),
        ),
    )


def build_supabase_repositories() -> Repositories:
    # Imported lazily so the memory backend never needs the supabase client
    from .supabase import (
        SupabaseBookingRepository,
        SupabaseCatalogRepository,
        SupabaseItineraryRepository,
        SupabaseSessionRepository,
        SupabaseUserRepository,
    )
    return Repositories(
        users=SupabaseUserRepository(),
        sessions=SupabaseSessionRepository(),
        itineraries=SupabaseItineraryRepository(),
        bookings=SupabaseBookingRepository(),
        catalog=SupabaseCatalogRepository(),
    )


def build_repositories(backend: str, seed_demo_data: bool = True) -> Repositories:
    """
    Select the storage implementation at startup

    Args:
        backend: "memory" or "supabase"
        seed_demo_data: Seed demo users (memory backend only)

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "memory":
        logger.info("Using in-memory storage (seed_demo_data=%s)", seed_demo_data)
        return build_memory_repositories(seed_demo_data)
    if backend == "supabase":
        logger.info("Using Supabase storage")
        return build_supabase_repositories()
    raise ValueError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "Repositories",
    "UserRepository",
    "SessionRepository",
    "ItineraryRepository",
    "BookingRepository",
    "CatalogRepository",
    "build_repositories",
    "build_memory_repositories",
    "build_supabase_repositories",
]
