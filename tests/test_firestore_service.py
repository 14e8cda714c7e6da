from datetime import datetime, timedelta, timezone

import pytest

from app.services.firestore_service import FirestoreService
from fake_firestore import FakeFirestore


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def fs(db):
    return FirestoreService(db)


def test_save_applies_defaults(fs, db):
    itinerary_id = fs.save_itinerary_for_user("u1", {"totalCost": "not a number"}, {"destination": "Oslo"})

    stored = db.collection("itineraries").docs[itinerary_id]
    assert stored["id"] == itinerary_id
    assert stored["title"] == "Untitled Trip"
    assert stored["summary"] == "No description available"
    assert stored["totalCost"] == 0
    for field in ("days", "restaurants", "accommodations", "tips"):
        assert stored[field] == []
    assert stored["formData"] == {"destination": "Oslo"}
    assert datetime.fromisoformat(stored["createdAt"]).tzinfo is not None


def test_list_returns_only_own_records_newest_first(fs, db):
    col = db.collection("itineraries")
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i, uid in enumerate(["u1", "u2", "u1", "u1"]):
        col.document(f"{uid}_{i}").set({
            "userId": uid,
            "title": f"Trip {i}",
            "createdAt": (base + timedelta(days=i)).isoformat(),
        })

    records = fs.list_itineraries_for_user("u1")

    assert [r["title"] for r in records] == ["Trip 3", "Trip 2", "Trip 0"]
    assert all(r["id"].startswith("u1_") for r in records)


def test_get_hides_other_users_records(fs):
    itinerary_id = fs.save_itinerary_for_user("u1", {"title": "Mine"}, {})
    assert fs.get_itinerary_for_user("u1", itinerary_id)["title"] == "Mine"
    assert fs.get_itinerary_for_user("u2", itinerary_id) is None
    assert fs.get_itinerary_for_user("u1", "missing") is None


def test_delete_only_own_records(fs, db):
    itinerary_id = fs.save_itinerary_for_user("u1", {"title": "Mine"}, {})

    assert fs.delete_itinerary_for_user("u2", itinerary_id) is False
    assert itinerary_id in db.collection("itineraries").docs

    assert fs.delete_itinerary_for_user("u1", itinerary_id) is True
    assert itinerary_id not in db.collection("itineraries").docs


def test_user_profile_keeps_original_created_at(fs):
    first = fs.create_user_profile("u1", name="Ana", email="ana@example.com")
    second = fs.create_user_profile("u1", name="Ana Silva", email="ana@example.com")

    assert second["createdAt"] == first["createdAt"]
    assert fs.get_user_profile("u1")["name"] == "Ana Silva"
    assert fs.get_user_profile("nobody") is None
