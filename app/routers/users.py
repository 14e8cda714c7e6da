"""
User profile router.

Sign-up and sign-in happen client-side with Firebase Auth; this router only
keeps the users/{uid} profile document that goes with the account.
"""

from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
import logging

from app.dependencies import verify_id_token_dependency
from app.routers.itineraries import get_firestore_service
from app.services.firestore_service import FirestoreService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])


class UserProfileRequest(BaseModel):
    """Profile fields captured at sign-up; token claims are used when omitted"""
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=254)


class UserProfileResponse(BaseModel):
    success: bool
    user: Optional[Dict[str, Any]] = None
    message: str


@router.post("/users/me", response_model=UserProfileResponse)
def upsert_profile(
    body: UserProfileRequest,
    decoded_token: Dict[str, Any] = Depends(verify_id_token_dependency),
    fs: FirestoreService = Depends(get_firestore_service)
):
    uid = decoded_token.get("uid")
    if not uid:
        raise HTTPException(status_code=401, detail="Invalid UID in token")

    name = body.name or decoded_token.get("name") or ""
    email = body.email or decoded_token.get("email") or ""
    profile = fs.create_user_profile(uid, name=name, email=email)
    logger.info(f"Stored profile for user {uid}")
    return UserProfileResponse(success=True, user=profile, message="Profile saved")


@router.get("/users/me", response_model=UserProfileResponse)
def get_profile(
    decoded_token: Dict[str, Any] = Depends(verify_id_token_dependency),
    fs: FirestoreService = Depends(get_firestore_service)
):
    uid = decoded_token.get("uid")
    profile = fs.get_user_profile(uid) if uid else None
    if not profile:
        raise HTTPException(status_code=404, detail="User profile not found")
    return UserProfileResponse(success=True, user=profile, message="Profile retrieved")
