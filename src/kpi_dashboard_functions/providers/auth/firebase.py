import logging
from dataclasses import dataclass, field
from typing import Any

import firebase_admin
from fastapi.concurrency import run_in_threadpool
from firebase_admin import auth

from kpi_dashboard_functions.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    uid: str
    token: dict[str, Any] = field(default_factory=dict)


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, value = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


class FirebaseTokenVerifier:
    """Resolve a Firebase ID token into an AuthContext.

    A rejected token is reported as "no authenticated caller" and the reason
    is only logged. Verifier misconfiguration (no project id) is re-raised.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._app: firebase_admin.App | None = None

    async def verify(self, id_token: str | None) -> AuthContext | None:
        if not id_token:
            return None
        try:
            claims = await run_in_threadpool(auth.verify_id_token, id_token, self._get_app())
        except (auth.InvalidIdTokenError, auth.UserDisabledError, auth.CertificateFetchError) as exc:
            logger.warning("auth.verify_failed type=%s", exc.__class__.__name__)
            return None
        except ValueError as exc:
            logger.error("auth.verifier_misconfigured detail=%s", exc)
            raise
        uid = str(claims.get("uid") or claims.get("sub") or "")
        if not uid:
            logger.warning("auth.verify_failed type=MissingUid")
            return None
        return AuthContext(uid=uid, token=dict(claims))

    def _get_app(self) -> firebase_admin.App:
        if self._app is None:
            try:
                self._app = firebase_admin.get_app()
            except ValueError:
                options = {"projectId": self.settings.firebase_project_id} if self.settings.firebase_project_id else None
                self._app = firebase_admin.initialize_app(options=options)
                logger.info("firebase.initialized project=%s", self.settings.firebase_project_id or "<default>")
        return self._app
