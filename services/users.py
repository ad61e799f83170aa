import hashlib
import logging
from typing import Any, Dict, Optional

from firebase_admin import auth

from config import GRAVATAR_URL
from services.errors import BadRequest, NotFound, ValidationError, data_access
from services.firestore import FirestoreDB
from utils.dates import now_iso

logger = logging.getLogger(__name__)


def gravatar_url(email: str) -> str:
    """Gravatar image for an email: 200px, pg rated, mystery-man fallback"""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_URL}{digest}?s=200&r=pg&d=mm"


class UserService:
    def __init__(self, db: FirestoreDB):
        self.db = db

    def register(self, name: str, email: str, password: str, password2: Optional[str] = None) -> Dict[str, Any]:
        """
        Create the Firebase Auth account and the matching profile document.
        Firebase Auth owns the password hash and email uniqueness; the profile
        only keeps what posts and comments copy from it.
        """
        if password2 is not None and password != password2:
            raise ValidationError("Passwords do not match")

        avatar = gravatar_url(email)
        try:
            record = auth.create_user(
                email=email,
                password=password,
                display_name=name,
                photo_url=avatar,
            )
        except auth.EmailAlreadyExistsError:
            raise BadRequest("User already exists")

        profile = {
            "name": name,
            "email": email,
            "avatar": avatar,
            "date": now_iso(),
        }
        try:
            with data_access("storing user profile"):
                user = self.db.create_user(record.uid, profile)
        except Exception:
            # without a profile the account could neither post nor register again
            logger.warning("Profile write failed, removing auth user %s", record.uid)
            auth.delete_user(record.uid)
            raise

        logger.info("Registered user %s", record.uid)
        return user

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        with data_access("loading user"):
            user = self.db.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user
