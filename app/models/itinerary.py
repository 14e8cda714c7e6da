from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List, Union

from app.models.trip import TripRequest


def format_amount(amount: Union[int, float]) -> str:
    """Render a money amount without a trailing .0 for whole numbers"""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


# ---------------------------
# Core Models
# ---------------------------
# Shapes only: values (negative costs, ratings above 5) are not judged here,
# the model output is checked for structure and nothing else.

class Activity(BaseModel):
    time: str
    activity: str
    location: str
    cost: float
    description: str


class DayPlan(BaseModel):
    day: int
    date: Optional[str] = None        # always re-derived after parsing
    morning: Activity
    afternoon: Activity
    evening: Activity
    tips: List[str] = []


class Restaurant(BaseModel):
    name: str
    type: str
    priceRange: str
    rating: float
    speciality: str


class Lodging(BaseModel):
    name: str
    type: str
    pricePerNight: float
    rating: float
    amenities: List[str] = []


class Itinerary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    summary: str
    totalCost: float
    dailyBudget: Optional[float] = None
    days: List[DayPlan]
    restaurants: List[Restaurant]
    accommodations: List[Lodging]
    tips: List[str]

    @field_validator("dailyBudget", mode="before")
    @classmethod
    def drop_placeholder_daily_budget(cls, v):
        # Models sometimes echo the template placeholder instead of a number
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return v
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                return None
        return None


# ---------------------------
# Request/Response Models
# ---------------------------

class PlanTripResponse(BaseModel):
    status: str
    itinerary: Itinerary
    provenance: str
    fallbackReason: Optional[str] = None
    processingTime: float
    metadata: Dict[str, Any]


class SaveItineraryRequest(BaseModel):
    itinerary: Itinerary
    formData: TripRequest


class SaveItineraryResponse(BaseModel):
    ok: bool = True
    itineraryId: str


class ItineraryRecord(Itinerary):
    id: str
    userId: str
    createdAt: str
    formData: Dict[str, Any] = Field(default_factory=dict)


class ListItinerariesResponse(BaseModel):
    ok: bool = True
    itineraries: List[ItineraryRecord]


class TripStats(BaseModel):
    totalTrips: int = 0
    totalSpent: float = 0
    countriesVisited: int = 0
    favoriteType: str = "adventure"


class ShareResponse(BaseModel):
    title: str
    text: str
