import os
import json
import logging
from typing import Optional, Dict, Any

from fastapi import Depends, Header, HTTPException
from firebase_admin import credentials, initialize_app, get_app, _apps, auth, firestore as admin_firestore
from google.cloud import secretmanager
from google.api_core import exceptions as gapi_exceptions

from app.config import settings, cloud_config

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


SERVICE_ACCOUNT_SECRET = os.getenv("SERVICE_ACCOUNT_SECRET")  # e.g. projects/PROJECT_ID/secrets/SA_KEY/versions/latest
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or settings.service_account_key_path


def _access_secret_from_sm(resource_name: str) -> str:
    """
    Given a full Secret Manager resource name (projects/.../secrets/.../versions/...),
    retrieve the secret payload (string).
    """
    try:
        client = secretmanager.SecretManagerServiceClient()
        response = client.access_secret_version(request={"name": resource_name})
        return response.payload.data.decode("UTF-8")
    except gapi_exceptions.GoogleAPIError as e:
        logger.exception("Unable to access secret %s: %s", resource_name, e)
        raise


def _service_account_secret_name() -> Optional[str]:
    if SERVICE_ACCOUNT_SECRET:
        # support shorthand secret ID (e.g., "SA_KEY") by turning it into a resource name if project id provided
        if not SERVICE_ACCOUNT_SECRET.startswith("projects/") and settings.project_id:
            return f"projects/{settings.project_id}/secrets/{SERVICE_ACCOUNT_SECRET}/versions/latest"
        return SERVICE_ACCOUNT_SECRET
    return None


def _init_firebase(cred: Optional[credentials.Base] = None):
    """
    Initialize firebase_admin once. Without a credential, Application Default
    Credentials are used (Cloud Run with an attached service account).
    """
    if _apps:
        return get_app()

    options = {"projectId": settings.project_id} if settings.project_id else None
    if cred is None:
        app = initialize_app(options=options)
        logger.info("Initialized firebase_admin with Application Default Credentials (ADC)")
    else:
        app = initialize_app(cred, options=options)
        logger.info("Initialized firebase_admin with service account credential")
    return app


def init_firebase_admin():
    """
    Initialize firebase_admin and return Firestore client.
    Order of preference:
      1) SERVICE_ACCOUNT_SECRET env var -> fetch JSON from Secret Manager
      2) GOOGLE_APPLICATION_CREDENTIALS / SERVICE_ACCOUNT_KEY_PATH -> local file path (dev)
      3) ADC (Cloud Run) -> initialize_app() without args

    Returns:
        firestore.Client instance
    """
    secret_name = _service_account_secret_name()
    if secret_name:
        logger.info("Loading service account from Secret Manager: %s", secret_name)
        sa_dict = json.loads(_access_secret_from_sm(secret_name))
        _init_firebase(credentials.Certificate(sa_dict))
    elif GOOGLE_APPLICATION_CREDENTIALS and os.path.exists(GOOGLE_APPLICATION_CREDENTIALS):
        logger.info("Loading service account from path: %s", GOOGLE_APPLICATION_CREDENTIALS)
        _init_firebase(credentials.Certificate(GOOGLE_APPLICATION_CREDENTIALS))
    else:
        logger.info(
            "No explicit service account provided, attempting Application Default Credentials (ADC)%s",
            " on Cloud Run" if cloud_config.IS_CLOUD_RUN else ""
        )
        _init_firebase()

    return admin_firestore.client(database_id=settings.database)


# Lazily initialize a single global Firestore client to reuse across requests
_db_client = None


def get_firestore_client():
    global _db_client
    if _db_client is None:
        _db_client = init_firebase_admin()
    return _db_client


# ---------------------------
# FastAPI dependencies
# ---------------------------
def _extract_bearer_token(authorization_header: Optional[str]) -> str:
    if not authorization_header:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    parts = authorization_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")
    return parts[1]


def verify_id_token(token: str) -> Dict[str, Any]:
    """
    Verify Firebase ID token and return decoded token dict (contains uid, claims).
    Raises HTTPException(401) on failure.
    """
    _init_firebase_for_auth()
    try:
        return auth.verify_id_token(token)
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
            auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
        logger.warning("Invalid Firebase ID token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid or expired ID token")


def _init_firebase_for_auth():
    # Token verification needs an initialized app but not a Firestore client
    if not _apps:
        get_firestore_client()


async def verify_id_token_dependency(authorization: Optional[str] = Header(None)) -> Dict[str, Any]:
    """
    FastAPI dependency that checks Authorization header and verifies the ID token.
    Returns decoded token (a dict). Use it as a parameter:
        def endpoint(decoded_token = Depends(verify_id_token_dependency)):
            uid = decoded_token["uid"]
    """
    token = _extract_bearer_token(authorization)
    return verify_id_token(token)


async def optional_verify_id_token_dependency(authorization: Optional[str] = Header(None)) -> Optional[Dict[str, Any]]:
    """Like verify_id_token_dependency, but anonymous callers get None instead of a 401"""
    if not authorization:
        return None
    return verify_id_token(_extract_bearer_token(authorization))


def get_current_uid(decoded_token: Dict[str, Any] = Depends(verify_id_token_dependency)) -> str:
    """
    Extract uid from the decoded token.
    """
    uid = decoded_token.get("uid")
    if not uid:
        raise HTTPException(status_code=401, detail="Invalid UID in token")
    return uid
