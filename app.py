"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.handlers import handle_proxify
from core.config import Config
from core.protocols import RequestLogger
from services.encoder import ResponseEncoder
from services.forwarder import RequestForwarder


def create_app(
    config: Config,
    logger: RequestLogger,
    forwarder: RequestForwarder | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    # /proxify is the only route; everything else is a 404
    app = FastAPI(
        title="HTTP Relay",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Stateless collaborators; transports and clients are built per call
    app.state.forwarder = forwarder or RequestForwarder(timeout=config.upstream.timeout)
    app.state.encoder = ResponseEncoder()

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=exc.headers,
        )

    @app.post("/proxify")
    async def proxify(request: Request):
        return await handle_proxify(request, config, logger)

    return app
