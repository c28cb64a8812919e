import os
import firebase_admin
from firebase_admin import credentials, firestore
from sams_admin.config import GOOGLE_APPLICATION_CREDENTIALS, SERVICE_ACCOUNT_PATH

# --- Database Initialization ---
_db = None


def init_firebase():
    if firebase_admin._apps:
        return

    # Prefer explicit credentials if present.
    if GOOGLE_APPLICATION_CREDENTIALS and os.path.exists(GOOGLE_APPLICATION_CREDENTIALS):
        firebase_admin.initialize_app(credentials.Certificate(GOOGLE_APPLICATION_CREDENTIALS))
        return

    # Fallback: service account file next to where the script is run
    local_sa = os.path.join(os.getcwd(), SERVICE_ACCOUNT_PATH)
    if os.path.exists(local_sa):
        firebase_admin.initialize_app(credentials.Certificate(local_sa))
        return

    # Last resort: ADC (e.g., gcloud auth application-default login)
    firebase_admin.initialize_app()


def get_db():
    """
    Returns a singleton Firestore client.
    Acquired once per process and never closed; process exit reclaims it.
    """
    global _db
    if _db is not None:
        return _db

    init_firebase()
    _db = firestore.client()
    return _db
