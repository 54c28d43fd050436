# auth_routes.py
# Login URL builder and authorization-code exchange

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from errors import ConfigurationError, UpstreamError, ValidationError
from models import AuthUrlOut, CallbackReq, TokenOut
from settings import Settings
from spotify import build_login_url, exchange_code

log = logging.getLogger("spotify-stats-api")

router = APIRouter(prefix="/auth", tags=["auth"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/login", response_model=AuthUrlOut)
def login(settings: Settings = Depends(get_settings)):
    try:
        auth_url = build_login_url(settings)
    except ConfigurationError as e:
        log.error(f"Spotify login URL could not be built: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate auth URL")
    log.info("Generated Spotify authorization URL.")
    return {"authUrl": auth_url}


@router.post("/callback", response_model=TokenOut)
def callback(req: Optional[CallbackReq] = None, settings: Settings = Depends(get_settings)):
    code = req.code if req is not None else None
    try:
        token_info = exchange_code(settings, code)
    except ValidationError as e:
        log.warning(f"Spotify callback rejected: {e}")
        raise HTTPException(status_code=400, detail="Authorization code is required")
    except ConfigurationError as e:
        log.error(f"Spotify callback failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to exchange code for token")
    except UpstreamError as e:
        log.error(f"Token exchange error (Status: {e.upstream_status}): {e.body}")
        raise HTTPException(status_code=500, detail="Failed to exchange code for token")

    return {
        "access_token": token_info["access_token"],
        "expires_in": token_info.get("expires_in"),
        "token_type": token_info.get("token_type"),
    }
