import pytest

from travelsage.services import CatalogStore
from travelsage.utils.errors import NotFoundError


@pytest.fixture
def store(container):
    return container.catalog


def names(items):
    return [item.name for item in items]


async def test_search_matches_name_and_excludes_others(store):
    results = await store.search_destinations(query="paris")
    assert names(results) == ["Paris"]
    assert "Tokyo" not in names(results)


async def test_search_matches_country_and_description(store):
    assert names(await store.search_destinations(query="JAPAN")) == ["Tokyo"]
    assert names(await store.search_destinations(query="rice terraces")) == ["Bali"]


async def test_continent_and_interest_filters(store):
    assert names(await store.search_destinations(continent="europe")) == ["Paris", "Santorini", "Barcelona"]
    assert names(await store.search_destinations(interest="Beach")) == ["Santorini", "Bali", "Barcelona"]
    assert names(await store.search_destinations(continent="Asia", interest="food")) == ["Tokyo"]


async def test_all_and_blank_filters_are_ignored(store):
    everything = await store.search_destinations()
    assert len(everything) == 6
    assert await store.search_destinations(query="", continent="all", interest="  ") == everything


async def test_featured_destinations_are_capped(store, container):
    assert len(await store.get_featured_destinations()) == 6

    capped = CatalogStore(container.catalog.catalog, featured_limit=2, recommended_limit=1)
    assert names(await capped.get_featured_destinations()) == ["Paris", "Tokyo"]
    assert names(await capped.get_recommended_restaurants()) == ["El Jardin"]


async def test_destination_by_id(store):
    assert (await store.get_destination_by_id("dest2")).name == "Tokyo"
    with pytest.raises(NotFoundError):
        await store.get_destination_by_id("dest99")


async def test_activities_by_destination(store):
    assert len(await store.get_activities_by_destination("dest6")) == 4
    assert await store.get_activities_by_destination("dest1") == []
    assert await store.get_activities_by_destination("dest99") == []


async def test_restaurant_filters(store):
    assert names(await store.search_restaurants(cuisine="japanese")) == ["Sakura Sushi"]
    assert names(await store.search_restaurants(price_range="$$")) == ["El Jardin", "Trattoria Bella Italia", "Green Garden"]
    assert names(await store.search_restaurants(query="rome")) == ["Trattoria Bella Italia"]
    assert await store.search_restaurants(cuisine="Korean") == []


async def test_restaurant_lookups(store):
    assert len(await store.get_recommended_restaurants()) == 4
    assert names(await store.get_restaurants_by_location("Bali")) == ["Green Garden"]
    assert (await store.get_restaurant_by_id("rest1")).name == "El Jardin"
    with pytest.raises(NotFoundError):
        await store.get_restaurant_by_id("rest99")


async def test_activity_search(store):
    assert names(await store.search_activities(category="outdoor")) == ["Mediterranean Sailing"]
    assert names(await store.search_activities(query="tapas")) == ["Tapas Walking Tour"]


async def test_popular_activities_sorted_by_rating(store):
    popular = await store.get_popular_activities()
    # act1 and act4 tie at 4.9 and keep catalog order
    assert [a.id for a in popular] == ["act1", "act4", "act2", "act3"]
    assert len(await store.get_popular_activities(limit=2)) == 2


async def test_activity_by_id(store):
    assert (await store.get_activity_by_id("act3")).name == "Mediterranean Sailing"
    with pytest.raises(NotFoundError):
        await store.get_activity_by_id("act99")
