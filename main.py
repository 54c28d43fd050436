# main.py
# FastAPI backend for the Spotify Stats relay
import logging
import os
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import auth_routes
import stats_routes
from models import HealthOut
from settings import Settings, load_settings

# -------------------- Config / Logging --------------------
APP_NAME = "spotify-stats-api"
log = logging.getLogger(APP_NAME)

ROUTING_MISSES = {
    (404, HTTPStatus.NOT_FOUND.phrase),
    (405, HTTPStatus.METHOD_NOT_ALLOWED.phrase),
}


def _log_settings(settings: Settings) -> None:
    log.info("--- Spotify Config ---")
    log.info(f"SPOTIFY_CLIENT_ID loaded: {bool(settings.client_id)}")
    log.info(f"SPOTIFY_CLIENT_SECRET loaded: {bool(settings.client_secret)}")
    log.info(f"SPOTIFY_REDIRECT_URI: {settings.redirect_uri or '(unset)'}")
    log.info(f"SPOTIFY_TOKEN_AUTH: {settings.token_auth}")
    log.info(f"FRONTEND_URL: {settings.frontend_url}")
    log.info("--- End Spotify Config ---")


# -------------------- Error Envelope --------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, str) and (exc.status_code, exc.detail) in ROUTING_MISSES:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    log.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


# -------------------- FastAPI App + CORS --------------------
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    _log_settings(settings)

    app = FastAPI(title="Spotify Stats API", version="1.0")
    app.state.settings = settings

    log.info(f"Allowed CORS origin: {settings.frontend_url}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(auth_routes.router)
    app.include_router(stats_routes.router)

    @app.get("/health", response_model=HealthOut)
    def health():
        return HealthOut()

    return app


settings = load_settings()
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
app = create_app(settings)


# -------------------- Entry Point --------------------
if __name__ == "__main__":
    import uvicorn

    ssl_args = {}
    if settings.https_enabled:
        ssl_args = {"ssl_keyfile": settings.ssl_keyfile, "ssl_certfile": settings.ssl_certfile}
    scheme = "https" if settings.https_enabled else "http"
    log.info(f"Server is running on {scheme}://0.0.0.0:{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port, **ssl_args)
