from fastapi import APIRouter, Body, Depends, HTTPException, status, Response
from pydantic import BaseModel
from typing import Optional, Dict, Any
import logging
from datetime import datetime, timezone

from app.dependencies import optional_verify_id_token_dependency
from app.models.itinerary import PlanTripResponse
from app.models.trip import TripRequest
from app.services.itinerary_service import ItineraryService, get_itinerary_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["trip"])


class ErrorResponse(BaseModel):
    """Error response model"""
    status: str = "error"
    message: str
    details: Optional[Any] = None


# API Endpoints
@router.post("/plantrip", response_model=PlanTripResponse, responses={
    400: {"model": ErrorResponse, "description": "Bad Request"},
    401: {"model": ErrorResponse, "description": "Unauthorized"},
    500: {"model": ErrorResponse, "description": "Internal Server Error"}
})
async def plan_trip(
    response: Response,
    form: Dict[str, Any] = Body(..., description="Planner form: destination, duration, budget, tripType, season, ..."),
    itinerary_service: ItineraryService = Depends(get_itinerary_service),
    decoded_token: Optional[Dict[str, Any]] = Depends(optional_verify_id_token_dependency)
):
    """
    Plan a trip from the planner form.

    Always answers with a complete itinerary for a valid form. When the model
    is unavailable or answers with something unusable, an offline itinerary is
    returned and `provenance` is `fallback`.
    """
    start_time = datetime.now()

    try:
        request = TripRequest.from_form(form)
        logger.info(f"Planning trip to {request.destination} for {request.duration} days, budget: {request.budget}")

        result = await itinerary_service.generate_itinerary(request)

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"Trip planning completed ({result.provenance}) in {processing_time:.2f}s")

        response.headers["X-Request-Timeout"] = "120"
        response.headers["X-Processing-Time"] = str(processing_time)

        return PlanTripResponse(
            status="success",
            itinerary=result.itinerary,
            provenance=result.provenance,
            fallbackReason=result.reason,
            processingTime=processing_time,
            metadata={
                "userId": decoded_token.get("uid") if decoded_token else None,
                "generatedAt": datetime.now(timezone.utc).isoformat(),
                "llmUsed": not result.is_fallback,
                "formData": request.to_form_data()
            }
        )

    except ValueError as e:
        logger.error(f"Validation error in trip planning: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"status": "error", "message": f"Invalid request: {str(e)}", "details": getattr(e, "errors", None)}
        )
    except Exception as e:
        logger.error(f"Unexpected error in trip planning: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"status": "error", "message": "Internal server error"}
        )


@router.get("/health")
async def health_check():
    """Health check endpoint for the trip service"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "itinerary_service": "available",
            "fallback_generator": "available"
        }
    }
