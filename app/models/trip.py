from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.config import settings
from app.errors import InputValidationError


# ---------------------------
# Preference Enums
# ---------------------------

class TripType(str, Enum):
    BEACH = "beach"
    ADVENTURE = "adventure"
    CULTURE = "culture"
    CITY = "city"
    NATURE = "nature"
    LUXURY = "luxury"
    BACKPACKING = "backpacking"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class Pace(str, Enum):
    RELAXED = "relaxed"
    MODERATE = "moderate"
    PACKED = "packed"


class AccommodationLevel(str, Enum):
    BUDGET = "budget"
    MID_RANGE = "mid-range"
    LUXURY = "luxury"


class Transportation(str, Enum):
    PUBLIC = "public"
    MIXED = "mixed"
    PRIVATE = "private"


# ---------------------------
# Trip Request
# ---------------------------

class TripRequest(BaseModel):
    """Validated trip preferences as collected by the planner form"""

    model_config = ConfigDict(frozen=True, use_enum_values=True, validate_default=True)

    destination: str = Field(..., min_length=1, max_length=100, description="Travel destination")
    duration: int = Field(..., ge=1, description="Trip length in days")
    budget: float = Field(..., gt=0, description="Total budget in USD")
    tripType: TripType
    season: Season
    groupSize: str = Field("2", min_length=1, max_length=10, description="Group size label, e.g. 1, 2, 3-4, 5+")
    interests: List[str] = Field(default_factory=list, description="Interest tags, order irrelevant")
    pace: Pace = Pace.MODERATE
    accommodation: AccommodationLevel = AccommodationLevel.MID_RANGE
    transportation: Transportation = Transportation.MIXED

    @field_validator("destination", "groupSize", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v > settings.max_days:
            raise ValueError(f"Trip duration must be at most {settings.max_days} days, got {v}")
        return v

    @field_validator("budget")
    @classmethod
    def validate_budget(cls, v):
        if v > settings.max_budget:
            raise ValueError(f"Budget must be at most {settings.max_budget}, got {v}")
        return v

    @field_validator("interests")
    @classmethod
    def normalize_interests(cls, v):
        # A set on the wire; keep one canonical order so prompts are reproducible
        return sorted({tag.strip().lower() for tag in v if tag and tag.strip()})

    @classmethod
    def from_form(cls, form: Dict[str, Any]) -> "TripRequest":
        """
        Build a TripRequest from a raw planner form.

        Raises:
            InputValidationError: when the form is missing fields or holds invalid values
        """
        try:
            return cls.model_validate(form)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in errors)
            raise InputValidationError(f"Invalid trip request fields: {fields}", errors) from e

    def to_form_data(self) -> Dict[str, Any]:
        """Serialize back to the camelCase form shape stored alongside saved itineraries"""
        return self.model_dump(mode="json")
