"""Seed data: the catalog reference collections and demo accounts"""
from typing import List

from ..models import Activity, Destination, Restaurant, User
from ..utils.security import hash_password

_UNSPLASH = "https://images.unsplash.com/{photo}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80"

DEMO_PASSWORD = "password123"


def seed_destinations() -> List[Destination]:
    return [
        Destination(
            id="dest1",
            name="Paris",
            country="France",
            continent="Europe",
            description="Experience the city of lights with its iconic landmarks, world-class cuisine, and romantic ambiance.",
            image_url=_UNSPLASH.format(photo="photo-1523906834658-6e24ef2386f9"),
            rating=4.8,
            average_cost=1200,
            interests=["Culture", "Romance", "Food"],
            is_featured=True,
        ),
        Destination(
            id="dest2",
            name="Tokyo",
            country="Japan",
            continent="Asia",
            description="Blend of ultramodern and traditional with buzzing districts, historic temples, and incredible food scene.",
            image_url=_UNSPLASH.format(photo="photo-1542051841857-5f90071e7989"),
            rating=4.9,
            average_cost=1800,
            interests=["Adventure", "Food", "Culture"],
            is_featured=True,
        ),
        Destination(
            id="dest3",
            name="Santorini",
            country="Greece",
            continent="Europe",
            description="Stunning sunsets, whitewashed buildings, crystal blue waters, and volcanic beaches await.",
            image_url=_UNSPLASH.format(photo="photo-1596422846543-75c6fc197f07"),
            rating=4.7,
            average_cost=1500,
            interests=["Beach", "Romance", "Adventure"],
            is_featured=True,
        ),
        Destination(
            id="dest4",
            name="Bali",
            country="Indonesia",
            continent="Asia",
            description="Tropical paradise with lush rice terraces, sacred temples, vibrant coral reefs, and wellness retreats.",
            image_url=_UNSPLASH.format(photo="photo-1512036666432-2181c1f26420"),
            rating=4.6,
            average_cost=1100,
            interests=["Wellness", "Nature", "Beach"],
            is_featured=True,
        ),
        Destination(
            id="dest5",
            name="New York City",
            country="USA",
            continent="North America",
            description="The city that never sleeps offers iconic skyscrapers, diverse neighborhoods, world-class entertainment.",
            image_url=_UNSPLASH.format(photo="photo-1534351590666-13e3e96b5017"),
            rating=4.5,
            average_cost=1600,
            interests=["Urban", "Culture", "Food"],
            is_featured=True,
        ),
        Destination(
            id="dest6",
            name="Barcelona",
            country="Spain",
            continent="Europe",
            description="Known for stunning architecture, Mediterranean beaches, vibrant nightlife, and amazing food scene.",
            image_url=_UNSPLASH.format(photo="photo-1518548419970-58e3b4079ab2"),
            rating=4.7,
            average_cost=1300,
            interests=["Architecture", "Food", "Beach"],
            is_featured=True,
        ),
    ]


def seed_restaurants() -> List[Restaurant]:
    return [
        Restaurant(
            id="rest1",
            name="El Jardin",
            description="Authentic Spanish cuisine with a modern twist, featuring locally sourced ingredients and panoramic city views.",
            image_url=_UNSPLASH.format(photo="photo-1514933651103-005eec06c04b"),
            location="Barcelona, Spain",
            distance="0.8 miles away",
            cuisine=["Mediterranean", "Spanish"],
            price_range="$$",
            rating=4.8,
            review_count=243,
            opening_time="Reservations available tonight",
            is_recommended=True,
        ),
        Restaurant(
            id="rest2",
            name="Sakura Sushi",
            description="Traditional omakase experience with the freshest seafood from Tsukiji market, prepared by master chef Tanaka.",
            image_url=_UNSPLASH.format(photo="photo-1517248135467-4c7edcad34c4"),
            location="Tokyo, Japan",
            distance="1.2 miles away",
            cuisine=["Japanese", "Sushi"],
            price_range="$$$",
            rating=4.9,
            review_count=178,
            opening_time="Few spots left for tomorrow",
            is_recommended=True,
        ),
        Restaurant(
            id="rest3",
            name="Trattoria Bella Italia",
            description="Family-run trattoria serving authentic Roman dishes using recipes passed down through generations.",
            image_url=_UNSPLASH.format(photo="photo-1424847651672-bf20a4b0982b"),
            location="Rome, Italy",
            distance="0.5 miles away",
            cuisine=["Italian", "Pasta"],
            price_range="$$",
            rating=4.7,
            review_count=321,
            opening_time="Reservations available tonight",
            is_recommended=True,
        ),
        Restaurant(
            id="rest4",
            name="Green Garden",
            description="Farm-to-table vegetarian restaurant with organic ingredients grown in their own garden with Balinese influences.",
            image_url=_UNSPLASH.format(photo="photo-1555396273-367ea4eb4db5"),
            location="Bali, Indonesia",
            distance="2.1 miles away",
            cuisine=["Vegetarian", "Organic"],
            price_range="$$",
            rating=4.6,
            review_count=196,
            is_recommended=True,
        ),
    ]


def seed_activities() -> List[Activity]:
    return [
        Activity(
            id="act1",
            name="Paella Cooking Class",
            description="Learn to make authentic Spanish paella with a local chef, including market tour and wine.",
            image_url=_UNSPLASH.format(photo="photo-1606820854416-439b3305ff39"),
            location="Barcelona, Spain",
            price=65,
            currency="EUR",
            rating=4.9,
            duration="3 hours",
            category=["Food", "Cultural"],
        ),
        Activity(
            id="act2",
            name="Gaudí Architecture Tour",
            description="Skip-the-line guided tour of Sagrada Familia and other Gaudí masterpieces in Barcelona.",
            image_url=_UNSPLASH.format(photo="photo-1566073771259-6a8506099945"),
            location="Barcelona, Spain",
            price=49,
            currency="EUR",
            rating=4.8,
            duration="4 hours",
            category=["Cultural", "Architecture"],
        ),
        Activity(
            id="act3",
            name="Mediterranean Sailing",
            description="3-hour sailing experience along Barcelona's coast with drinks and snacks included.",
            image_url=_UNSPLASH.format(photo="photo-1583422409516-2895a77efded"),
            location="Barcelona, Spain",
            price=79,
            currency="EUR",
            rating=4.7,
            duration="3 hours",
            category=["Adventure", "Outdoor"],
        ),
        Activity(
            id="act4",
            name="Tapas Walking Tour",
            description="Evening food tour visiting 4 authentic tapas bars with local guide and wine pairings.",
            image_url=_UNSPLASH.format(photo="photo-1614555383830-848e7561120f"),
            location="Barcelona, Spain",
            price=85,
            currency="EUR",
            rating=4.9,
            duration="4 hours",
            category=["Food", "Cultural"],
            is_recommended=True,
        ),
    ]


def seed_users() -> List[User]:
    """Demo accounts; passwords are hashed like any registered user's"""
    return [
        User(
            id="user1",
            username="johndoe",
            password_hash=hash_password(DEMO_PASSWORD),
            email="john@example.com",
            first_name="John",
            last_name="Doe",
        ),
        User(
            id="user2",
            username="janedoe",
            password_hash=hash_password(DEMO_PASSWORD),
            email="jane@example.com",
            first_name="Jane",
            last_name="Doe",
        ),
    ]
