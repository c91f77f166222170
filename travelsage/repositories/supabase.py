"""Supabase-backed repositories: one table per entity, itinerary days embedded as JSON"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel
from supabase import Client, create_client

from ..config import settings
from ..models import Activity, Booking, Destination, Itinerary, Restaurant, Session, User
from ..utils.errors import DependencyError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class SupabaseClient:
    """Singleton Supabase client wrapper"""
    _instance: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Client:
        """Get or create Supabase client instance"""
        if cls._instance is None:
            if not settings.supabase_url or not settings.supabase_key:
                raise DependencyError(
                    "Supabase storage selected but SUPABASE_URL/SUPABASE_KEY are not set"
                )
            cls._instance = create_client(
                supabase_url=settings.supabase_url,
                supabase_key=settings.supabase_key
            )
        return cls._instance


def _execute(query, action: str) -> List[Dict[str, Any]]:
    """
    Run a query builder and return its rows

    Raises:
        DependencyError: If the Supabase request fails
    """
    try:
        result = query.execute()
    except Exception as e:
        logger.error("Supabase %s failed: %s", action, e)
        raise DependencyError(
            f"Database request failed while trying to {action}",
            {"original_error": str(e)}
        ) from e
    return result.data or []


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``ilike`` matches the value exactly, ignoring case"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row(model: BaseModel) -> Dict[str, Any]:
    # snake_case columns, JSON-safe values (dates, datetimes, nested days)
    return model.model_dump(mode="json")


def _first(rows: List[Dict[str, Any]], model: Type[ModelT]) -> Optional[ModelT]:
    return model.model_validate(rows[0]) if rows else None


class _SupabaseTable:
    table_name: str = ""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        return self._client or SupabaseClient.get_client()

    def table(self):
        return self.client.table(self.table_name)


class SupabaseUserRepository(_SupabaseTable):
    table_name = "users"

    async def get(self, user_id: str) -> Optional[User]:
        rows = _execute(self.table().select("*").eq("id", user_id), "fetch user")
        return _first(rows, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        rows = _execute(self.table().select("*").ilike("username", escape_like(username)), "fetch user by username")
        return _first(rows, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        rows = _execute(self.table().select("*").ilike("email", escape_like(email)), "fetch user by email")
        return _first(rows, User)

    async def add(self, user: User) -> User:
        rows = _execute(self.table().insert(_row(user)), "create user")
        return _first(rows, User) or user

    async def save(self, user: User) -> User:
        rows = _execute(self.table().update(_row(user)).eq("id", user.id), "update user")
        return _first(rows, User) or user

    async def list_all(self) -> List[User]:
        rows = _execute(self.table().select("*").order("created_at"), "list users")
        return [User.model_validate(row) for row in rows]


class SupabaseSessionRepository(_SupabaseTable):
    table_name = "sessions"

    async def add(self, session: Session) -> Session:
        rows = _execute(self.table().insert(_row(session)), "create session")
        return _first(rows, Session) or session

    async def get(self, session_id: str) -> Optional[Session]:
        rows = _execute(self.table().select("*").eq("id", session_id), "fetch session")
        return _first(rows, Session)

    async def delete(self, session_id: str) -> None:
        _execute(self.table().delete().eq("id", session_id), "delete session")


class SupabaseItineraryRepository(_SupabaseTable):
    table_name = "itineraries"

    async def add(self, itinerary: Itinerary) -> Itinerary:
        rows = _execute(self.table().insert(_row(itinerary)), "create itinerary")
        return _first(rows, Itinerary) or itinerary

    async def get(self, itinerary_id: str) -> Optional[Itinerary]:
        rows = _execute(self.table().select("*").eq("id", itinerary_id), "fetch itinerary")
        return _first(rows, Itinerary)

    async def save(self, itinerary: Itinerary) -> Itinerary:
        rows = _execute(
            self.table().update(_row(itinerary)).eq("id", itinerary.id),
            "update itinerary"
        )
        return _first(rows, Itinerary) or itinerary

    async def delete(self, itinerary_id: str) -> bool:
        rows = _execute(self.table().delete().eq("id", itinerary_id), "delete itinerary")
        return bool(rows)

    async def list_for_user(self, user_id: str) -> List[Itinerary]:
        rows = _execute(
            self.table()
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True),
            "list itineraries"
        )
        return [Itinerary.model_validate(row) for row in rows]

    async def find_by_item_id(self, item_id: str) -> Optional[Itinerary]:
        rows = _execute(self.table().select("*"), "scan itineraries")
        for row in rows:
            itinerary = Itinerary.model_validate(row)
            if itinerary.find_item(item_id) is not None:
                return itinerary
        return None


class SupabaseBookingRepository(_SupabaseTable):
    table_name = "bookings"

    async def add(self, booking: Booking) -> Booking:
        rows = _execute(self.table().insert(_row(booking)), "create booking")
        return _first(rows, Booking) or booking

    async def get(self, booking_id: str) -> Optional[Booking]:
        rows = _execute(self.table().select("*").eq("id", booking_id), "fetch booking")
        return _first(rows, Booking)

    async def save(self, booking: Booking) -> Booking:
        rows = _execute(self.table().update(_row(booking)).eq("id", booking.id), "update booking")
        return _first(rows, Booking) or booking

    async def list_for_user(self, user_id: str, booking_type: Optional[str] = None) -> List[Booking]:
        query = self.table().select("*").eq("user_id", user_id)
        if booking_type:
            query = query.eq("type", booking_type)
        rows = _execute(query.order("created_at", desc=True), "list bookings")
        return [Booking.model_validate(row) for row in rows]


class SupabaseCatalogRepository:
    """Catalog tables in insertion (id) order"""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        return self._client or SupabaseClient.get_client()

    def _list(self, table: str, model: Type[ModelT]) -> List[ModelT]:
        rows = _execute(self.client.table(table).select("*").order("id"), f"list {table}")
        return [model.model_validate(row) for row in rows]

    def _get(self, table: str, model: Type[ModelT], entity_id: str) -> Optional[ModelT]:
        rows = _execute(self.client.table(table).select("*").eq("id", entity_id), f"fetch from {table}")
        return _first(rows, model)

    async def list_destinations(self) -> List[Destination]:
        return self._list("destinations", Destination)

    async def get_destination(self, destination_id: str) -> Optional[Destination]:
        return self._get("destinations", Destination, destination_id)

    async def list_restaurants(self) -> List[Restaurant]:
        return self._list("restaurants", Restaurant)

    async def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        return self._get("restaurants", Restaurant, restaurant_id)

    async def list_activities(self) -> List[Activity]:
        return self._list("activities", Activity)

    async def get_activity(self, activity_id: str) -> Optional[Activity]:
        return self._get("activities", Activity, activity_id)
