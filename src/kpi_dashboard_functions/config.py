from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-1.5-flash", alias="GEMINI_MODEL")
    gemini_temperature: float = Field(default=0.2, alias="GEMINI_TEMPERATURE")
    gemini_top_p: float = Field(default=0.8, alias="GEMINI_TOP_P")
    gemini_top_k: int = Field(default=40, alias="GEMINI_TOP_K")
    gemini_max_output_tokens: int = Field(default=8192, alias="GEMINI_MAX_OUTPUT_TOKENS")
    llm_timeout_seconds: float = Field(default=60.0, alias="LLM_TIMEOUT_SECONDS")
    llm_num_retries: int = Field(default=0, alias="LLM_NUM_RETRIES")

    maps_api_key: str | None = Field(default=None, alias="MAPS_API_KEY")
    firebase_client_config: str | None = Field(default=None, alias="FIREBASE_CLIENT_CONFIG")
    firebase_project_id: str | None = Field(default=None, alias="FIREBASE_PROJECT_ID")

    cors_allow_origin_regex: str = Field(default=".*", alias="CORS_ALLOW_ORIGIN_REGEX")
    dev_proxy_target: str = Field(default="", alias="DEV_PROXY_TARGET")
    dev_proxy_timeout_seconds: float = Field(default=30.0, alias="DEV_PROXY_TIMEOUT_SECONDS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
