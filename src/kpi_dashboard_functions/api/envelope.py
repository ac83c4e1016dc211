"""Firebase callable-function wire envelope.

Requests arrive as ``{"data": ...}``; replies are ``{"result": ...}`` on
success or ``{"error": {"status", "message"}}`` with the matching HTTP code.
"""

import json
import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from kpi_dashboard_functions.api.schemas import CallableRequest
from kpi_dashboard_functions.service.summary import InvalidArgument, Summary, SummaryOutcome

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "unauthenticated": ("UNAUTHENTICATED", 401),
    "invalid-argument": ("INVALID_ARGUMENT", 400),
    "internal": ("INTERNAL", 500),
}

_MISSING = object()


async def read_callable_data(request: Request) -> Any:
    """Return the ``data`` member of a callable body, or a sentinel when the envelope is malformed."""
    try:
        body = await request.json()
        return CallableRequest.model_validate(body).data
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
        logger.info("callable.bad_envelope type=%s", exc.__class__.__name__)
        return _MISSING


def is_missing(data: Any) -> bool:
    return data is _MISSING


def error_response(kind: str, message: str) -> JSONResponse:
    status, http_status = ERROR_STATUS[kind]
    return JSONResponse(status_code=http_status, content={"error": {"status": status, "message": message}})


def outcome_response(outcome: SummaryOutcome) -> JSONResponse:
    if isinstance(outcome, Summary):
        return JSONResponse(status_code=200, content={"result": outcome.as_result()})
    return error_response(outcome.kind, outcome.message)


def bad_envelope_response() -> JSONResponse:
    return error_response(InvalidArgument.kind, "Request body must be a JSON object with a 'data' field.")
