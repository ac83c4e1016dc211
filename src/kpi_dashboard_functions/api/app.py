import logging
from typing import Protocol

from fastapi import FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kpi_dashboard_functions.api import envelope as rpc
from kpi_dashboard_functions.api.dev_proxy import build_dev_proxy_router
from kpi_dashboard_functions.api.schemas import (
    CallableErrorResponse,
    DebugStatusResponse,
    MapsApiKeyResponse,
    SummaryResponse,
)
from kpi_dashboard_functions.config import Settings, get_settings
from kpi_dashboard_functions.providers.auth.firebase import AuthContext, FirebaseTokenVerifier, bearer_token
from kpi_dashboard_functions.providers.llm.gemini import GeminiProvider
from kpi_dashboard_functions.service import status
from kpi_dashboard_functions.service.summary import ExecutiveSummaryService, Unauthenticated

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

ALLOW_ANY_ORIGIN = {"Access-Control-Allow-Origin": "*"}
PUBLIC_PATHS = frozenset({"/maps-api-key-proxy", "/firebase-config-proxy"})


class CallerCORSMiddleware(CORSMiddleware):
    """Credentialed CORS for caller-facing routes; public proxies keep their own wildcard header."""

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] == "http" and scope["path"] in PUBLIC_PATHS:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


class TokenVerifier(Protocol):
    async def verify(self, id_token: str | None) -> AuthContext | None: ...


def create_app(
    settings: Settings | None = None,
    summary_service: ExecutiveSummaryService | None = None,
    verifier: TokenVerifier | None = None,
) -> FastAPI:
    """Build the application; collaborators are created once here and shared by every request."""
    settings = settings or get_settings()
    summary_service = summary_service or ExecutiveSummaryService(generator=GeminiProvider(settings))
    verifier = verifier or FirebaseTokenVerifier(settings)

    app = FastAPI(title="kpi-dashboard-functions", version="0.1.0")
    app.state.settings = settings
    app.state.summary_service = summary_service
    app.state.verifier = verifier

    app.add_middleware(
        CallerCORSMiddleware,
        allow_origin_regex=settings.cors_allow_origin_regex,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )

    @app.get("/healthz")
    async def healthz() -> dict:
        return {"status": "ok"}

    @app.post(
        "/getExecutiveSummary",
        response_model=SummaryResponse,
        responses={code: {"model": CallableErrorResponse} for code in (400, 401, 500)},
    )
    async def get_executive_summary(
        request: Request,
        authorization: str | None = Header(default=None),
    ) -> JSONResponse:
        auth = await verifier.verify(bearer_token(authorization))
        if auth is None:
            return rpc.outcome_response(Unauthenticated())
        data = await rpc.read_callable_data(request)
        if rpc.is_missing(data):
            return rpc.bad_envelope_response()
        outcome = await summary_service.summarize(data, auth)
        return rpc.outcome_response(outcome)

    @app.get("/debug-status", response_model=DebugStatusResponse)
    async def debug_status() -> dict:
        return status.debug_status(settings)

    @app.get("/maps-api-key-proxy", response_model=MapsApiKeyResponse)
    async def maps_api_key_proxy() -> JSONResponse:
        return JSONResponse(content=status.maps_api_key(settings), headers=ALLOW_ANY_ORIGIN)

    @app.get("/firebase-config-proxy")
    async def firebase_config_proxy() -> JSONResponse:
        try:
            config = status.firebase_client_config(settings)
        except status.FirebaseConfigError as exc:
            return JSONResponse(
                status_code=500,
                content={"error": str(exc), "rawValue": exc.raw_value},
                headers=ALLOW_ANY_ORIGIN,
            )
        return JSONResponse(content=config, headers=ALLOW_ANY_ORIGIN)

    if settings.dev_proxy_target:
        logger.info("dev_proxy.enabled target=%s", settings.dev_proxy_target)
        app.include_router(
            build_dev_proxy_router(settings.dev_proxy_target, timeout=settings.dev_proxy_timeout_seconds)
        )

    return app


app = create_app()
