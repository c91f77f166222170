"""Catalog Store: read-only filtering over destinations, restaurants and activities"""
from typing import Iterable, List, Optional

from ..models import Activity, Destination, Restaurant
from ..repositories import CatalogRepository
from ..utils.errors import NotFoundError


def _is_blank(value: Optional[str]) -> bool:
    """Empty and "all" filter values are no-ops"""
    return value is None or not value.strip() or value.strip().lower() == "all"


def _matches_text(query: Optional[str], fields: Iterable[Optional[str]]) -> bool:
    if _is_blank(query):
        return True
    needle = query.strip().lower()
    return any(needle in (field or "").lower() for field in fields)


def _has_tag(tag: Optional[str], tags: Iterable[str]) -> bool:
    if _is_blank(tag):
        return True
    wanted = tag.strip().lower()
    return any(wanted == t.lower() for t in tags)


class CatalogStore:
    """
    Substring search and tag filters, results in collection order.

    No ranking: the only ordering anywhere is ``get_popular_activities``
    (rating, highest first).
    """

    def __init__(self, catalog: CatalogRepository, featured_limit: int = 6, recommended_limit: int = 4):
        self.catalog = catalog
        self.featured_limit = featured_limit
        self.recommended_limit = recommended_limit

    # Destinations

    async def search_destinations(
        self,
        query: Optional[str] = None,
        continent: Optional[str] = None,
        interest: Optional[str] = None,
    ) -> List[Destination]:
        """
        Args:
            query: Case-insensitive substring of name, country or description
            continent: Exact continent (case-insensitive)
            interest: Exact member of the destination's interests
        """
        return [
            d for d in await self.catalog.list_destinations()
            if _matches_text(query, (d.name, d.country, d.description))
            and _has_tag(continent, [d.continent])
            and _has_tag(interest, d.interests)
        ]

    async def get_featured_destinations(self) -> List[Destination]:
        featured = [d for d in await self.catalog.list_destinations() if d.is_featured]
        return featured[:self.featured_limit]

    async def get_destination_by_id(self, destination_id: str) -> Destination:
        destination = await self.catalog.get_destination(destination_id)
        if destination is None:
            raise NotFoundError("Destination not found")
        return destination

    async def get_activities_by_destination(self, destination_id: str) -> List[Activity]:
        """Activities located in the destination's city or country; unknown destination gives []"""
        destination = await self.catalog.get_destination(destination_id)
        if destination is None:
            return []
        name, country = destination.name.lower(), destination.country.lower()
        return [
            a for a in await self.catalog.list_activities()
            if name in a.location.lower() or country in a.location.lower()
        ]

    # Restaurants

    async def search_restaurants(
        self,
        query: Optional[str] = None,
        cuisine: Optional[str] = None,
        price_range: Optional[str] = None,
    ) -> List[Restaurant]:
        """
        Args:
            query: Case-insensitive substring of name, description or location
            cuisine: Exact member of the restaurant's cuisine list
            price_range: Exact price display ("$$")
        """
        return [
            r for r in await self.catalog.list_restaurants()
            if _matches_text(query, (r.name, r.description, r.location))
            and _has_tag(cuisine, r.cuisine)
            and (_is_blank(price_range) or r.price_range == price_range.strip())
        ]

    async def get_recommended_restaurants(self) -> List[Restaurant]:
        recommended = [r for r in await self.catalog.list_restaurants() if r.is_recommended]
        return recommended[:self.recommended_limit]

    async def get_restaurants_by_location(self, location: str) -> List[Restaurant]:
        return [r for r in await self.catalog.list_restaurants() if _matches_text(location, [r.location])]

    async def get_restaurant_by_id(self, restaurant_id: str) -> Restaurant:
        restaurant = await self.catalog.get_restaurant(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant not found")
        return restaurant

    # Activities

    async def search_activities(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Activity]:
        return [
            a for a in await self.catalog.list_activities()
            if _matches_text(query, (a.name, a.description, a.location))
            and _has_tag(category, a.category)
        ]

    async def get_popular_activities(self, limit: int = 4) -> List[Activity]:
        activities = await self.catalog.list_activities()
        # sorted() is stable, so equal ratings keep collection order
        return sorted(activities, key=lambda a: a.rating or 0, reverse=True)[:limit]

    async def get_activity_by_id(self, activity_id: str) -> Activity:
        activity = await self.catalog.get_activity(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found")
        return activity
