"""Wires repositories, stores and the assistant together once at startup"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .agents import AssistantResponder, build_responder
from .config import Settings
from .repositories import Repositories, build_repositories
from .services import AuthGate, BookingStore, CatalogStore, ItineraryStore
from .utils.rate_limiter import InMemoryRateLimiter

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Everything a request handler needs, held on ``app.state.container``"""
    settings: Settings
    auth: AuthGate
    itineraries: ItineraryStore
    bookings: BookingStore
    catalog: CatalogStore
    assistant: AssistantResponder
    assistant_limiter: InMemoryRateLimiter
    login_limiter: InMemoryRateLimiter

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        repositories: Optional[Repositories] = None,
        assistant: Optional[AssistantResponder] = None,
    ) -> "Container":
        """
        Build the container, selecting storage and assistant implementations

        Args:
            settings: Application settings
            repositories: Use these instead of the configured storage backend
            assistant: Use this instead of the configured assistant backend
        """
        repos = repositories or build_repositories(settings.storage_backend, settings.seed_demo_data)
        return cls(
            settings=settings,
            auth=AuthGate(
                repos.users,
                repos.sessions,
                session_ttl=timedelta(minutes=settings.session_ttl_minutes),
                min_password_length=settings.min_password_length,
            ),
            itineraries=ItineraryStore(repos.itineraries, repos.users, max_days=settings.max_itinerary_days),
            bookings=BookingStore(repos.bookings, repos.catalog),
            catalog=CatalogStore(
                repos.catalog,
                featured_limit=settings.featured_limit,
                recommended_limit=settings.recommended_limit,
            ),
            assistant=assistant or build_responder(settings),
            assistant_limiter=InMemoryRateLimiter(settings.assistant_requests_per_minute),
            login_limiter=InMemoryRateLimiter(settings.login_attempts_per_minute),
        )

    async def close(self) -> None:
        await self.assistant.close()
