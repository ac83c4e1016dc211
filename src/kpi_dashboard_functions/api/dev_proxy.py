import logging

import httpx
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

HOP_BY_HOP_HEADERS = {
    "connection",
    "content-encoding",
    "content-length",
    "host",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
}


def _forwardable(headers) -> dict[str, str]:
    return {key: value for key, value in headers.items() if key.lower() not in HOP_BY_HOP_HEADERS}


def build_dev_proxy_router(
    target: str,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> APIRouter:
    """Forward ``/api/<path>`` to ``<target>/<path>`` for local development against the emulator."""
    base_url = target.rstrip("/")
    router = APIRouter(prefix="/api")

    @router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def forward(path: str, request: Request) -> Response:
        url = f"{base_url}/{path}"
        body = await request.body()
        logger.info("dev_proxy.request method=%s url=%s", request.method, url)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                upstream = await client.request(
                    request.method,
                    url,
                    params=list(request.query_params.multi_items()),
                    content=body,
                    headers=_forwardable(request.headers),
                )
        except httpx.HTTPError as exc:
            logger.error("dev_proxy.error type=%s url=%s detail=%s", exc.__class__.__name__, url, exc)
            return JSONResponse(status_code=502, content={"error": f"Upstream unavailable: {exc.__class__.__name__}"})
        logger.info("dev_proxy.response status=%d url=%s", upstream.status_code, url)
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=_forwardable(upstream.headers),
        )

    return router
