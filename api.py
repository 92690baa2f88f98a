"""
FastAPI REST API for the Infino gateway.

Accepts search platform style calls under /infino/ and forwards them to
the Infino server.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Callable, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from infino_gateway import InfinoGateway
from infino_gateway.core.errors import GatewayError
from infino_gateway.core.models import GatewayResponse

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Body returned for requests that cannot be translated."""
    error: str
    detail: str
    status: int


class HealthResponse(BaseModel):
    status: str
    in_flight: int


def _to_response(result: GatewayResponse, method: str) -> Response:
    if method == "HEAD":
        return Response(status_code=result.status_code)
    return Response(content=result.body, status_code=result.status_code, media_type="text/plain")


async def _forward(
    request: Request,
    index: str,
    path: Optional[str],
) -> Response:
    """Translate the call, forward it and relay the result."""
    gateway: InfinoGateway = request.app.state.gateway
    params: Dict[str, str] = dict(request.query_params)
    body = await request.body()

    try:
        future = gateway.handle(request.method, index, path, params, body)
    except GatewayError as e:
        logger.error("Error serializing REST request for Infino: %s", e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    result = await asyncio.wrap_future(future)
    return _to_response(result, request.method)


def create_app(
    gateway_factory: Callable[[], InfinoGateway] = InfinoGateway.from_environment,
) -> FastAPI:
    """
    Create the gateway application.

    Args:
        gateway_factory: Builds the gateway at startup

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.gateway = gateway_factory()
        try:
            yield
        finally:
            drained = await asyncio.to_thread(app.state.gateway.shutdown)
            logger.info("Gateway stopped (drained=%s)", drained)

    app = FastAPI(
        title="Infino Gateway API",
        description="Forward search platform style requests to an Infino server",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException):
        error = "request_failed"
        if isinstance(exc.__cause__, GatewayError):
            error = exc.__cause__.kind.value
        payload = ErrorResponse(error=error, detail=str(exc.detail), status=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=payload.model_dump())

    # Every path is listed explicitly so the framework rejects illegal
    # paths before anything is sent to Infino.
    @app.api_route("/infino/{index}/{path:path}", methods=["GET", "HEAD", "POST"])
    async def forward_path(index: str, path: str, request: Request):
        return await _forward(request, index, path)

    @app.api_route("/infino/{index}", methods=["PUT", "DELETE", "HEAD"])
    async def forward_index(index: str, request: Request):
        return await _forward(request, index, None)

    @app.get("/_cat/infino/{index}")
    async def cat_index(index: str, request: Request):
        return await _forward(request, index, "_ping")

    @app.get("/_gateway/health", response_model=HealthResponse)
    async def health(request: Request):
        gateway: InfinoGateway = request.app.state.gateway
        return HealthResponse(status="ok", in_flight=gateway.in_flight_count())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    port = int(os.getenv("API_PORT", "8000"))
    host = os.getenv("API_HOST", "0.0.0.0")

    uvicorn.run(app, host=host, port=port)
