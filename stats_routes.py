# stats_routes.py
# Read-only relays to the Spotify Web API for the bearer of the request

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from errors import AuthenticationError, UpstreamError
from spotify import DEFAULT_LIMIT, DEFAULT_TIME_RANGE, SpotifyAPI, parse_bearer

log = logging.getLogger("spotify-stats-api")

router = APIRouter(prefix="/stats", tags=["stats"])


def get_spotify_api(authorization: Optional[str] = Header(default=None)) -> SpotifyAPI:
    """Bind a SpotifyAPI client to the caller's bearer token, or answer 401."""
    try:
        token = parse_bearer(authorization)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return SpotifyAPI(token)


def _time_range(value: Optional[str]) -> str:
    # empty ?time_range= means "use the default"
    return value or DEFAULT_TIME_RANGE


def _limit(value: Optional[str]) -> int:
    """Parse ?limit=, treating an absent or empty value as the default."""
    if not value:
        return DEFAULT_LIMIT
    try:
        limit = int(value)
    except ValueError:
        limit = 0
    if limit < 1:
        log.warning(f"Rejected limit value: {value!r}")
        raise HTTPException(status_code=400, detail="Invalid request")
    return limit


def _relay_failure(e: UpstreamError, message: str) -> HTTPException:
    log.error(f"{message} (Status: {e.upstream_status}): {e.body}")
    return HTTPException(status_code=e.status_code, detail=message)


@router.get("/user")
def user(spotify: SpotifyAPI = Depends(get_spotify_api)):
    try:
        return spotify.get_current_user()
    except UpstreamError as e:
        raise _relay_failure(e, "Failed to fetch user data")


@router.get("/top-tracks")
def top_tracks(
    time_range: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    spotify: SpotifyAPI = Depends(get_spotify_api),
):
    limit_value = _limit(limit)
    try:
        return spotify.get_top_tracks(_time_range(time_range), limit_value)
    except UpstreamError as e:
        raise _relay_failure(e, "Failed to fetch top tracks")


@router.get("/top-artists")
def top_artists(
    time_range: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    spotify: SpotifyAPI = Depends(get_spotify_api),
):
    limit_value = _limit(limit)
    try:
        return spotify.get_top_artists(_time_range(time_range), limit_value)
    except UpstreamError as e:
        raise _relay_failure(e, "Failed to fetch top artists")


@router.get("/recently-played")
def recently_played(
    limit: Optional[str] = Query(None),
    spotify: SpotifyAPI = Depends(get_spotify_api),
):
    limit_value = _limit(limit)
    try:
        return spotify.get_recently_played(limit_value)
    except UpstreamError as e:
        raise _relay_failure(e, "Failed to fetch recently played tracks")
