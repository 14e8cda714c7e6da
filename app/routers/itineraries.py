import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse

from app.dependencies import get_current_uid, get_firestore_client
from app.services.export_service import export_filename, render_itinerary_text, share_text
from app.services.firestore_service import FirestoreService
from app.services.itinerary_service import ItineraryService
from app.services.trip_stats import compute_trip_stats
from app.models.itinerary import (
    ItineraryRecord,
    ListItinerariesResponse,
    SaveItineraryRequest,
    SaveItineraryResponse,
    ShareResponse,
    TripStats,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["itineraries"])


def get_firestore_service() -> FirestoreService:
    """Dependency to get FirestoreService instance"""
    return FirestoreService(get_firestore_client())


def _load_record(fs: FirestoreService, uid: str, itinerary_id: str) -> ItineraryRecord:
    data = fs.get_itinerary_for_user(uid, itinerary_id)
    if data is None:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return ItineraryRecord.model_validate(data)


@router.post("/saveItinerary", response_model=SaveItineraryResponse)
def save_itinerary(
    body: SaveItineraryRequest,
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    itinerary_id = ItineraryService(fs=fs).save_itinerary(uid, body.itinerary, body.formData)
    return SaveItineraryResponse(ok=True, itineraryId=itinerary_id)


@router.get("/itineraries", response_model=ListItinerariesResponse)
def list_itineraries(
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    """Saved itineraries for the signed-in user, newest first"""
    records = fs.list_itineraries_for_user(uid)
    return ListItinerariesResponse(ok=True, itineraries=[ItineraryRecord.model_validate(r) for r in records])


@router.get("/itineraries/stats", response_model=TripStats)
def itinerary_stats(
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    return compute_trip_stats(fs.list_itineraries_for_user(uid))


@router.get("/itinerary/{itineraryId}", response_model=ItineraryRecord)
def get_itinerary(
    itineraryId: str,
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    return _load_record(fs, uid, itineraryId)


@router.delete("/itinerary/{itineraryId}")
def delete_itinerary(
    itineraryId: str,
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    if not fs.delete_itinerary_for_user(uid, itineraryId):
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return {"ok": True, "itineraryId": itineraryId}


@router.get("/itinerary/{itineraryId}/export", response_class=PlainTextResponse)
def export_itinerary(
    itineraryId: str,
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    """Download the itinerary as a plain-text document"""
    record = _load_record(fs, uid, itineraryId)
    destination = record.formData.get("destination") or "Unknown"
    return PlainTextResponse(
        render_itinerary_text(record, destination),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(record.title)}"'}
    )


@router.get("/itinerary/{itineraryId}/share", response_model=ShareResponse)
def share_itinerary(
    itineraryId: str,
    link: Optional[str] = Query(None, description="Public link appended to the share text"),
    uid: str = Depends(get_current_uid),
    fs: FirestoreService = Depends(get_firestore_service)
):
    record = _load_record(fs, uid, itineraryId)
    return ShareResponse(title=record.title, text=share_text(record, link))
