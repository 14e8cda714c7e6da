import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Union

from app.errors import ParseError, TransportError
from app.models.itinerary import Itinerary
from app.models.trip import TripRequest
from app.services.fallback import build_fallback_itinerary
from app.services.firestore_service import FirestoreService
from app.services.llm_service import GeminiLLMService, LLMConfig, get_llm_service
from app.services.postprocess import finalize_itinerary
from app.services.prompts import build_itinerary_prompt
from app.services.response_parser import parse_itinerary_response

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

GENERATED = "generated"
FALLBACK = "fallback"


@dataclass(frozen=True)
class Generated:
    """Itinerary produced by the model"""
    itinerary: Itinerary
    provenance: str = field(default=GENERATED, init=False)
    reason: Optional[str] = field(default=None, init=False)

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback:
    """Itinerary synthesized offline because the model path failed"""
    itinerary: Itinerary
    reason: str
    provenance: str = field(default=FALLBACK, init=False)

    @property
    def is_fallback(self) -> bool:
        return True


GenerationResult = Union[Generated, Fallback]


class ItineraryService:
    """Plans itineraries with the model and falls back to an offline plan when it fails"""

    def __init__(
        self,
        llm_service: Optional[GeminiLLMService] = None,
        fs: Optional[FirestoreService] = None,
        llm_config: Optional[LLMConfig] = None
    ):
        self.llm_service = llm_service or get_llm_service()
        self._fs = fs
        self.llm_config = llm_config

    @property
    def fs(self) -> FirestoreService:
        if self._fs is None:
            from app.dependencies import get_firestore_client
            self._fs = FirestoreService(get_firestore_client())
        return self._fs

    async def generate_itinerary(self, request: TripRequest, today: Optional[date] = None) -> GenerationResult:
        """
        Generate an itinerary for a validated trip request.

        Never raises for model problems: a transport failure or an unusable
        answer yields a Fallback result built from the request alone.
        """
        logger.info(
            f"Generating itinerary for {request.destination}, {request.duration} days, "
            f"budget: {request.budget}, type: {request.tripType}"
        )
        prompt = build_itinerary_prompt(request)

        try:
            response = await self.llm_service.generate_content(prompt, self.llm_config)
            candidate = parse_itinerary_response(response.content, expected_days=request.duration)
        except (TransportError, ParseError) as e:
            logger.warning(f"Falling back to offline itinerary ({type(e).__name__}): {e}")
            return Fallback(itinerary=build_fallback_itinerary(request, today), reason=str(e))

        itinerary = finalize_itinerary(candidate, request, today)
        logger.info(f"Itinerary generation completed: '{itinerary.title}'")
        return Generated(itinerary=itinerary)

    def save_itinerary(self, uid: str, itinerary: Itinerary, form_data: TripRequest) -> str:
        """Persist an itinerary for a user together with the request that produced it"""
        record: Dict[str, Any] = itinerary.model_dump()
        itinerary_id = self.fs.save_itinerary_for_user(uid, record, form_data.to_form_data())
        logger.info(f"Saved itinerary {itinerary_id} for user {uid}")
        return itinerary_id


def get_itinerary_service() -> ItineraryService:
    """Get instance of ItineraryService"""
    return ItineraryService()
