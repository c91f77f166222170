"""Catalog reads: destinations, restaurants and activities"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..container import Container
from ..middleware.auth import get_container
from ..models import Activity, Destination, Restaurant
from ..schemas.response import ERROR_RESPONSES

router = APIRouter(tags=["catalog"])


@router.get("/destinations", response_model=List[Destination])
async def list_destinations(
    query: Optional[str] = Query(None, description="Substring of name, country or description"),
    continent: Optional[str] = Query(None, description="Exact continent, or 'all'"),
    interest: Optional[str] = Query(None, description="Exact interest tag, or 'all'"),
    container: Container = Depends(get_container),
):
    return await container.catalog.search_destinations(query, continent, interest)


@router.get("/destinations/featured", response_model=List[Destination])
async def featured_destinations(container: Container = Depends(get_container)):
    return await container.catalog.get_featured_destinations()


@router.get("/destinations/{destination_id}", response_model=Destination, responses=ERROR_RESPONSES)
async def get_destination(destination_id: str, container: Container = Depends(get_container)):
    return await container.catalog.get_destination_by_id(destination_id)


@router.get("/destinations/{destination_id}/activities", response_model=List[Activity])
async def destination_activities(destination_id: str, container: Container = Depends(get_container)):
    """Activities in the destination's city or country (empty for unknown destinations)"""
    return await container.catalog.get_activities_by_destination(destination_id)


@router.get("/restaurants", response_model=List[Restaurant])
async def list_restaurants(
    query: Optional[str] = Query(None, description="Substring of name, description or location"),
    cuisine: Optional[str] = Query(None, description="Exact cuisine tag, or 'all'"),
    price_range: Optional[str] = Query(None, alias="priceRange", description="$, $$, $$$ or $$$$"),
    location: Optional[str] = Query(None, description="Substring of location"),
    container: Container = Depends(get_container),
):
    restaurants = await container.catalog.search_restaurants(query, cuisine, price_range)
    if location:
        nearby = {r.id for r in await container.catalog.get_restaurants_by_location(location)}
        restaurants = [r for r in restaurants if r.id in nearby]
    return restaurants


@router.get("/restaurants/recommended", response_model=List[Restaurant])
async def recommended_restaurants(container: Container = Depends(get_container)):
    return await container.catalog.get_recommended_restaurants()


@router.get("/restaurants/{restaurant_id}", response_model=Restaurant, responses=ERROR_RESPONSES)
async def get_restaurant(restaurant_id: str, container: Container = Depends(get_container)):
    return await container.catalog.get_restaurant_by_id(restaurant_id)


@router.get("/activities", response_model=List[Activity])
async def list_activities(
    query: Optional[str] = Query(None, description="Substring of name, description or location"),
    category: Optional[str] = Query(None, description="Exact category tag, or 'all'"),
    container: Container = Depends(get_container),
):
    return await container.catalog.search_activities(query, category)


@router.get("/activities/popular", response_model=List[Activity])
async def popular_activities(container: Container = Depends(get_container)):
    """Top four activities by rating"""
    return await container.catalog.get_popular_activities()


@router.get("/activities/{activity_id}", response_model=Activity, responses=ERROR_RESPONSES)
async def get_activity(activity_id: str, container: Container = Depends(get_container)):
    return await container.catalog.get_activity_by_id(activity_id)
