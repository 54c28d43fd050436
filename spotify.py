# spotify.py
# Thin wrappers over the Spotify accounts and Web API endpoints

import base64
import logging
import secrets
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

import requests

from errors import AuthenticationError, ConfigurationError, UpstreamError, ValidationError
from settings import Settings

log = logging.getLogger("spotify-stats-api")

SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1"
SPOTIFY_SCOPES = [
    "user-read-private",
    "user-read-email",
    "user-top-read",
    "user-read-recently-played",
]

DEFAULT_TIME_RANGE = "medium_term"
DEFAULT_LIMIT = 20


# -------------------- Auth --------------------
def build_login_url(settings: Settings) -> str:
    """Return the Spotify authorize URL the browser should be sent to.

    A fresh `state` value is attached on every call. The callback does not
    receive or check it.
    """
    if not settings.client_id:
        raise ConfigurationError("SPOTIFY_CLIENT_ID environment variable is required")
    if not settings.redirect_uri:
        raise ConfigurationError("SPOTIFY_REDIRECT_URI environment variable is required")

    auth_params = {
        "response_type": "code",
        "client_id": settings.client_id,
        "scope": " ".join(SPOTIFY_SCOPES),
        "redirect_uri": settings.redirect_uri,
        "state": secrets.token_hex(8),
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(auth_params, quote_via=quote)}"


def exchange_code(settings: Settings, code: Optional[str]) -> Dict[str, Any]:
    """Trade an authorization code for the upstream token payload."""
    if not code:
        raise ValidationError("Authorization code is required")
    if not settings.client_id:
        raise ConfigurationError("SPOTIFY_CLIENT_ID environment variable is required")
    if not settings.client_secret:
        raise ConfigurationError("SPOTIFY_CLIENT_SECRET environment variable is required")
    if not settings.redirect_uri:
        raise ConfigurationError("SPOTIFY_REDIRECT_URI environment variable is required")

    headers = {"Content-Type": "application/x-www-form-urlencoded"}
    payload = {"grant_type": "authorization_code", "code": code, "redirect_uri": settings.redirect_uri}
    if settings.token_auth == "body":
        payload["client_id"] = settings.client_id
        payload["client_secret"] = settings.client_secret
    else:
        auth_string = f"{settings.client_id}:{settings.client_secret}"
        auth_base64 = base64.b64encode(auth_string.encode("utf-8")).decode("utf-8")
        headers["Authorization"] = f"Basic {auth_base64}"

    log.info(f"Exchanging Spotify code for tokens (code: {code[:10]}...)")
    response = None
    try:
        response = requests.post(SPOTIFY_TOKEN_URL, headers=headers, data=payload)
        response.raise_for_status()
    except requests.RequestException as e:
        status_code = response.status_code if response is not None else None
        response_text = response.text if response is not None else str(e)
        log.error(f"Error exchanging Spotify code for tokens: {e} (Status: {status_code}) Response: {response_text}")
        raise UpstreamError("Token exchange failed", status_code, response_text)
    try:
        token_info = response.json()
    except ValueError as e:
        log.error(f"Spotify token endpoint returned a non-JSON body: {e}")
        raise UpstreamError("Token exchange failed", None, response.text)

    if not isinstance(token_info, dict) or not token_info.get("access_token"):
        log.error("Spotify token exchange response did not contain access_token.")
        raise UpstreamError("Token exchange failed", None, response.text)
    log.info(f"Spotify token exchange successful. Access token expires in {token_info.get('expires_in')}s.")
    return token_info


# -------------------- Web API --------------------
def parse_bearer(authorization: Optional[str]) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization:
        raise AuthenticationError("Access token is required")
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Access token is required")
    return token


class SpotifyAPI:
    """Read-only Web API calls made on behalf of one access token."""

    def __init__(self, access_token: str):
        self.access_token = access_token

    def _get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        url = f"{SPOTIFY_API_BASE_URL}{endpoint}"
        response = None
        try:
            response = requests.get(url, headers=headers, params=params)
            response.raise_for_status()
        except requests.RequestException as e:
            status_code = response.status_code if response is not None else None
            response_text = response.text if response is not None else str(e)
            log.error(f"Spotify API error on {endpoint}: {e} (Status: {status_code}) Response: {response_text}")
            raise UpstreamError(f"Spotify API error on {endpoint}", status_code, response_text)
        try:
            return response.json()
        except ValueError as e:
            log.error(f"Spotify API returned a non-JSON body on {endpoint}: {e}")
            raise UpstreamError(f"Spotify API error on {endpoint}", None, response.text)

    def get_current_user(self) -> Dict[str, Any]:
        return self._get("/me")

    def get_top_tracks(self, time_range: str = DEFAULT_TIME_RANGE, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
        return self._get("/me/top/tracks", {"time_range": time_range, "limit": limit})

    def get_top_artists(self, time_range: str = DEFAULT_TIME_RANGE, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
        return self._get("/me/top/artists", {"time_range": time_range, "limit": limit})

    def get_recently_played(self, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
        return self._get("/me/player/recently-played", {"limit": limit})
