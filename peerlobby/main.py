from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from peerlobby.api.router import router
from peerlobby.core import Settings, settings as default_settings
from peerlobby.runtime.cleanup import CleanupScheduler
from peerlobby.runtime.errors import InvalidArgument, RoomNotFound
from peerlobby.runtime.presence import RoomRegistry
from peerlobby.runtime.signaling import PeerEvents

logger = logging.getLogger(__name__)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RoomNotFound)
    async def room_not_found(request: Request, exc: RoomNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Room not found"})

    @app.exception_handler(InvalidArgument)
    async def invalid_argument(request: Request, exc: InvalidArgument) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "invalid request")
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": f"{field}: {message}" if field else message})

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title="peerlobby API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    _install_error_handlers(app)
    app.include_router(router)

    registry = RoomRegistry(participant_timeout=settings.PARTICIPANT_TIMEOUT_SECONDS)
    app.state.settings = settings
    app.state.registry = registry
    app.state.peer_events = PeerEvents(registry)
    app.state.cleanup = CleanupScheduler(registry, cleanup_interval=settings.CLEANUP_INTERVAL_SECONDS)

    @app.on_event("startup")
    async def startup_event():
        """Start the background presence sweep."""
        logger.info("peerlobby starting (environment=%s)", settings.ENV)
        if settings.CLEANUP_ENABLED:
            app.state.cleanup.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.cleanup.stop()
        app.state.registry.clear()
        logger.info("peerlobby shut down")

    return app


app = create_app()
