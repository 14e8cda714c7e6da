from collections import Counter
from typing import Any, Dict, Iterable

from app.models.itinerary import TripStats

DEFAULT_FAVORITE_TYPE = "adventure"


def _total_cost(record: Dict[str, Any]) -> float:
    try:
        return float(record.get("totalCost") or 0)
    except (TypeError, ValueError):
        return 0


def favorite_trip_type(records: Iterable[Dict[str, Any]]) -> str:
    """Most frequent formData.tripType; the earliest seen wins a tie"""
    types = [(r.get("formData") or {}).get("tripType") for r in records]
    counts = Counter(t for t in types if t)
    if not counts:
        return DEFAULT_FAVORITE_TYPE
    # Counter preserves insertion order and most_common is stable
    return counts.most_common(1)[0][0]


def compute_trip_stats(records: Iterable[Dict[str, Any]]) -> TripStats:
    records = list(records)
    destinations = {
        (r.get("formData") or {}).get("destination")
        for r in records
    }
    destinations.discard(None)
    destinations.discard("")
    return TripStats(
        totalTrips=len(records),
        totalSpent=sum(_total_cost(r) for r in records),
        countriesVisited=len(destinations),
        favoriteType=favorite_trip_type(records),
    )
