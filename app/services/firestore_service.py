"""
Firestore Service Layer for the itinerary planner.

This service wraps all read/write operations for:
- User profiles (users/{uid})
- Saved itineraries (itineraries/{uid}_{epoch_millis})

Assumptions:
- Saved itineraries live in one top-level collection and carry a userId field.
- Each record keeps the originating trip request under formData.
- Listing sorts by createdAt in process, so no composite index is required.
"""

import logging
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from firebase_admin import firestore

from app.config import settings

logger = logging.getLogger(__name__)

ITINERARY_DEFAULTS = {
    "title": "Untitled Trip",
    "summary": "No description available",
}
LIST_FIELDS = ("days", "restaurants", "accommodations", "tips")


def _as_number(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


class FirestoreService:
    def __init__(self, db: firestore.Client):
        self.db = db
        self.itineraries = settings.itineraries_collection
        self.users = settings.users_collection

    # -------------------------
    # Utility
    # -------------------------
    def _now(self):
        return datetime.now(timezone.utc)

    def _new_itinerary_id(self, uid: str) -> str:
        return f"{uid}_{int(self._now().timestamp() * 1000)}"

    # -------------------------
    # User Helpers
    # -------------------------
    def create_user_profile(self, uid: str, name: str, email: str) -> Dict[str, Any]:
        profile = {
            "uid": uid,
            "name": name,
            "email": email,
            "createdAt": self._now().isoformat(),
        }
        existing = self.get_user_profile(uid)
        if existing and existing.get("createdAt"):
            profile["createdAt"] = existing["createdAt"]
        self.db.collection(self.users).document(uid).set(profile, merge=True)
        return profile

    def get_user_profile(self, uid: str) -> Optional[Dict[str, Any]]:
        snap = self.db.collection(self.users).document(uid).get()
        return snap.to_dict() if snap.exists else None

    # -------------------------
    # Itinerary Helpers
    # -------------------------
    def build_itinerary_record(self, uid: str, itinerary: Dict[str, Any], form_data: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(itinerary)
        record["id"] = self._new_itinerary_id(uid)
        record["userId"] = uid
        record["createdAt"] = self._now().isoformat()
        for field, default in ITINERARY_DEFAULTS.items():
            record[field] = record.get(field) or default
        record["totalCost"] = _as_number(record.get("totalCost"))
        for field in LIST_FIELDS:
            record[field] = record.get(field) or []
        record["formData"] = form_data or {}
        return record

    def save_itinerary_for_user(self, uid: str, itinerary: Dict[str, Any], form_data: Dict[str, Any]) -> str:
        record = self.build_itinerary_record(uid, itinerary, form_data)
        self.db.collection(self.itineraries).document(record["id"]).set(record)
        logger.info(f"Stored itinerary {record['id']} for user {uid}")
        return record["id"]

    def list_itineraries_for_user(self, uid: str) -> List[Dict[str, Any]]:
        query = self.db.collection(self.itineraries).where(
            filter=firestore.FieldFilter("userId", "==", uid)
        )
        records = []
        for snap in query.stream():
            data = snap.to_dict()
            if data:
                data.setdefault("id", snap.id)
                records.append(data)
        records.sort(key=lambda r: r.get("createdAt") or "", reverse=True)
        return records

    def get_itinerary_for_user(self, uid: str, itinerary_id: str) -> Optional[Dict[str, Any]]:
        """Return the record only when it belongs to uid"""
        snap = self.db.collection(self.itineraries).document(itinerary_id).get()
        if not snap.exists:
            return None
        data = snap.to_dict()
        if data.get("userId") != uid:
            return None
        data.setdefault("id", snap.id)
        return data

    def delete_itinerary_for_user(self, uid: str, itinerary_id: str) -> bool:
        if self.get_itinerary_for_user(uid, itinerary_id) is None:
            return False
        self.db.collection(self.itineraries).document(itinerary_id).delete()
        logger.info(f"Deleted itinerary {itinerary_id} for user {uid}")
        return True
