from typing import Any

from pydantic import BaseModel, Field


class CallableRequest(BaseModel):
    data: Any = Field(..., description="Callable payload, e.g. {period, view}.")


class CallableError(BaseModel):
    status: str
    message: str


class CallableErrorResponse(BaseModel):
    error: CallableError


class SummaryResult(BaseModel):
    summary: str


class SummaryResponse(BaseModel):
    result: SummaryResult


class EnvPresence(BaseModel):
    hasGeminiKey: bool
    hasMapsKey: bool
    hasFirebaseConfig: bool


class DebugStatusResponse(BaseModel):
    message: str
    nodeVersion: str
    env: EnvPresence


class MapsApiKeyResponse(BaseModel):
    apiKey: str | None
