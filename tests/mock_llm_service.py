"""
Mock LLM service and sample model output for tests.
"""

import copy
import json
import logging
from typing import Any, Dict, List, Optional

from app.services.llm_service import LLMConfig, LLMResponse

logger = logging.getLogger(__name__)


def sample_day(day: int, date_text: str = "formatted_date") -> Dict[str, Any]:
    return {
        "day": day,
        "date": date_text,
        "morning": {
            "time": "9:00 AM - 12:00 PM",
            "activity": "Sunrise walk along the Tagus",
            "location": "Belém",
            "cost": 20,
            "description": "Stroll past the tower and monastery before the crowds arrive."
        },
        "afternoon": {
            "time": "1:00 PM - 5:00 PM",
            "activity": "Tram 28 and Alfama lanes",
            "location": "Alfama",
            "cost": 35,
            "description": "Ride the historic tram and wander the old Moorish quarter."
        },
        "evening": {
            "time": "7:00 PM - 11:00 PM",
            "activity": "Fado dinner",
            "location": "Bairro Alto",
            "cost": 60,
            "description": "Traditional fado over grilled sardines."
        },
        "tips": ["Wear grippy shoes", "Buy a Viva Viagem card", "Book fado ahead"]
    }


def sample_itinerary_payload(days: int = 3, total_cost: float = 1500) -> Dict[str, Any]:
    return {
        "title": "Lisbon Light and Fado",
        "summary": "Hills, trams and late dinners across Lisbon's old quarters.",
        "totalCost": total_cost,
        "dailyBudget": "calculated_daily_budget",
        "days": [sample_day(i + 1, f"Day {i + 1} of the trip") for i in range(days)],
        "restaurants": [
            {"name": "Taberna da Rua das Flores", "type": "Portuguese", "priceRange": "$$", "rating": 4.7, "speciality": "Petiscos"}
        ],
        "accommodations": [
            {"name": "Casa do Largo", "type": "Guesthouse", "pricePerNight": 120, "rating": 4.6, "amenities": ["WiFi", "Breakfast"]}
        ],
        "tips": ["Lisbon is hilly", "Pastéis de nata are best warm", "Tipping is modest",
                 "Trams get crowded", "Carry water", "Sundays are quieter"]
    }


def sample_itinerary_json(days: int = 3, fenced: bool = False, language: str = "json", **kwargs) -> str:
    text = json.dumps(sample_itinerary_payload(days, **kwargs), indent=2, ensure_ascii=False)
    if fenced:
        return f"```{language}\n{text}\n```"
    return text


class MockLLMService:
    """Stands in for GeminiLLMService: returns canned text or raises a canned error"""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.content = content if content is not None else sample_itinerary_json()
        self.error = error
        self.prompts: List[str] = []

    async def generate_content(self, prompt: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        self.prompts.append(prompt)
        logger.info(f"Mock LLM generating content for: {prompt[:100]}...")
        if self.error is not None:
            raise self.error
        return LLMResponse(content=copy.copy(self.content), model="mock-model")
