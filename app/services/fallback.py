"""
Offline itinerary synthesis.

Used whenever the model cannot be reached or its answer is unusable. Builds a
complete itinerary from the trip request alone: no I/O and no randomness, so
the same request on the same day always yields the same document.
"""

import math
from datetime import date
from typing import Dict, Optional, Tuple

from app.models.itinerary import Activity, DayPlan, Itinerary, Lodging, Restaurant
from app.models.trip import TripRequest
from app.services.postprocess import trip_dates

# Share of the daily budget spent on each slot. Each share is floored on its
# own, so the three costs can add up to slightly less than the daily budget.
MORNING_SHARE = 0.3
AFTERNOON_SHARE = 0.4
EVENING_SHARE = 0.3
LODGING_SHARE = 0.4

# trip type -> (afternoon activity, location)
AFTERNOON_BY_TRIP_TYPE: Dict[str, Tuple[str, str]] = {
    "beach": ("Beach time and water sports", "Main Beach"),
    "culture": ("Museum and gallery hopping", "Arts District"),
}
GENERIC_AFTERNOON = ("Local market and food tour", "Central Market")

DAILY_TIPS = [
    "Book restaurant reservations in advance",
    "Carry cash for small vendors",
    "Stay hydrated and wear comfortable shoes",
]

GENERAL_TIPS = [
    "Download offline maps before you go",
    "Learn basic phrases in the local language",
    "Check local customs and etiquette",
    "Pack layers for changing weather",
    "Keep copies of important documents",
    "Research local transportation options",
]


def afternoon_for(trip_type: str) -> Tuple[str, str]:
    """Afternoon activity for a trip type; unknown types get the generic market tour"""
    return AFTERNOON_BY_TRIP_TYPE.get(str(trip_type).lower(), GENERIC_AFTERNOON)


def _build_day(index: int, day_date: str, destination: str, trip_type: str, daily_budget: int) -> DayPlan:
    afternoon_activity, afternoon_location = afternoon_for(trip_type)
    return DayPlan(
        day=index + 1,
        date=day_date,
        morning=Activity(
            time="9:00 AM - 12:00 PM",
            activity=f"Explore {destination}'s historic district",
            location="Historic Downtown",
            cost=math.floor(daily_budget * MORNING_SHARE),
            description="Start your day discovering the rich history and architecture of the old town.",
        ),
        afternoon=Activity(
            time="1:00 PM - 5:00 PM",
            activity=afternoon_activity,
            location=afternoon_location,
            cost=math.floor(daily_budget * AFTERNOON_SHARE),
            description="Immerse yourself in the local culture and lifestyle.",
        ),
        evening=Activity(
            time="7:00 PM - 11:00 PM",
            activity="Dinner at local restaurant and evening stroll",
            location="Restaurant District",
            cost=math.floor(daily_budget * EVENING_SHARE),
            description="End your day with delicious local cuisine and a peaceful evening walk.",
        ),
        tips=list(DAILY_TIPS),
    )


def build_fallback_itinerary(request: TripRequest, today: Optional[date] = None) -> Itinerary:
    """Synthesize a complete itinerary from the trip request alone. Never raises."""
    days = request.duration
    daily_budget = math.floor(request.budget / days)
    trip_type = str(getattr(request.tripType, "value", request.tripType))
    interests = ", ".join(request.interests) if request.interests else "exploring"

    return Itinerary(
        title=f"{days}-Day {trip_type.capitalize()} Adventure in {request.destination}",
        summary=(
            f"Experience the best of {request.destination} with this carefully curated {days}-day itinerary, "
            f"perfectly balanced for {request.pace} travelers who love {interests}."
        ),
        totalCost=request.budget,
        dailyBudget=daily_budget,
        days=[
            _build_day(index, day_date, request.destination, trip_type, daily_budget)
            for index, day_date in enumerate(trip_dates(days, today))
        ],
        restaurants=[
            Restaurant(name="Local Flavor Bistro", type="Traditional", priceRange="$$", rating=4.8, speciality="Local cuisine"),
            Restaurant(name="Sunset Cafe", type="International", priceRange="$$$", rating=4.6, speciality="Seafood"),
        ],
        accommodations=[
            Lodging(
                name="Boutique Hotel Central",
                type="Hotel",
                pricePerNight=math.floor(daily_budget * LODGING_SHARE),
                rating=4.7,
                amenities=["WiFi", "Breakfast", "Pool"],
            ),
        ],
        tips=list(GENERAL_TIPS),
    )
