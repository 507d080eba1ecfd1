"""
Identity provider client backed by Firebase Auth.
Only account deletion is delegated; sign in happens client side.
"""

from typing import Optional
from firebase_admin import auth, credentials
from starlette.concurrency import run_in_threadpool
from estatehub.config import settings
import firebase_admin
import base64
import json
import logging

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "estatehub"


class IdentityService:
    """
    Firebase Auth client initialized lazily from a base64 encoded
    service account JSON. When the key is missing or unusable the
    provider stays disabled and deletions are skipped.
    """

    def __init__(self, service_key: Optional[str] = None):
        self.service_key = service_key if service_key is not None else settings.firebase_service_key
        self._app: Optional[firebase_admin.App] = None
        self._disabled = False

    def _get_app(self) -> Optional[firebase_admin.App]:
        """Initialize the Firebase app on first use."""
        if self._app is not None or self._disabled:
            return self._app

        if not self.service_key:
            logger.warning("FIREBASE_SERVICE_KEY not set; identity provider disabled")
            self._disabled = True
            return None

        try:
            try:
                self._app = firebase_admin.get_app(FIREBASE_APP_NAME)
            except ValueError:
                info = json.loads(base64.b64decode(self.service_key).decode("utf-8"))
                self._app = firebase_admin.initialize_app(
                    credentials.Certificate(info),
                    name=FIREBASE_APP_NAME
                )
            logger.info("Firebase identity provider initialized")
        except Exception as e:
            logger.error(f"Failed to initialize Firebase identity provider: {e}")
            self._disabled = True

        return self._app

    async def delete_user(self, uid: Optional[str]) -> bool:
        """
        Delete an account from the identity provider.

        Best effort: any failure is logged and reported as False, never raised.

        Args:
            uid: Identity provider user id

        Returns:
            True if the account was deleted
        """
        if not uid:
            logger.info("User has no identity provider uid; skipping remote deletion")
            return False

        app = self._get_app()
        if app is None:
            return False

        try:
            await run_in_threadpool(auth.delete_user, uid, app=app)
            logger.info(f"Deleted identity provider account {uid}")
            return True
        except Exception as e:
            logger.error(f"Failed to delete identity provider account {uid}: {e}")
            return False


_identity_service: Optional[IdentityService] = None


def get_identity_service() -> IdentityService:
    """Process-wide identity provider client."""
    global _identity_service
    if _identity_service is None:
        _identity_service = IdentityService()
    return _identity_service
