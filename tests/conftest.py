import pytest

from kpi_dashboard_functions.config import Settings

ENV_ALIASES = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "MAPS_API_KEY",
    "FIREBASE_CLIENT_CONFIG",
    "FIREBASE_PROJECT_ID",
    "DEV_PROXY_TARGET",
    "LLM_NUM_RETRIES",
)


@pytest.fixture
def make_settings(monkeypatch):
    for name in ENV_ALIASES:
        monkeypatch.delenv(name, raising=False)

    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make
