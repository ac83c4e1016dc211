import json
import logging
import platform
from typing import Any

from kpi_dashboard_functions.config import Settings

logger = logging.getLogger(__name__)

DEBUG_MESSAGE = "Debug function is working!"
FIREBASE_CONFIG_ERROR = "Failed to parse Firebase config on the server. The value provided is not valid JSON."


class FirebaseConfigError(ValueError):
    def __init__(self, raw_value: str | None) -> None:
        super().__init__(FIREBASE_CONFIG_ERROR)
        self.raw_value = raw_value


def debug_status(settings: Settings) -> dict[str, Any]:
    """Report which secrets are configured without revealing their values."""
    return {
        "message": DEBUG_MESSAGE,
        "nodeVersion": runtime_version(),
        "env": {
            "hasGeminiKey": bool(settings.gemini_api_key),
            "hasMapsKey": bool(settings.maps_api_key),
            "hasFirebaseConfig": bool(settings.firebase_client_config),
        },
    }


def runtime_version() -> str:
    return f"v{platform.python_version()}"


def maps_api_key(settings: Settings) -> dict[str, str | None]:
    return {"apiKey": settings.maps_api_key}


def firebase_client_config(settings: Settings) -> dict[str, Any]:
    """Parse the client config blob, tolerating one pair of wrapping quotes."""
    raw = settings.firebase_client_config
    if raw is None:
        logger.error("firebase_config.parse_failed reason=missing")
        raise FirebaseConfigError(raw)

    cleaned = raw.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in ("'", '"'):
        cleaned = cleaned[1:-1]

    try:
        config = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("firebase_config.parse_failed reason=invalid_json detail=%s", exc.msg)
        raise FirebaseConfigError(raw) from exc
    if not isinstance(config, dict):
        logger.error("firebase_config.parse_failed reason=not_an_object type=%s", type(config).__name__)
        raise FirebaseConfigError(raw)
    return config
