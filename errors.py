# errors.py
# Failure taxonomy shared by the auth and stats relays

from typing import Optional


class RelayError(Exception):
    status_code = 500


class ConfigurationError(RelayError):
    """A required SPOTIFY_* environment value is not set."""
    status_code = 500


class ValidationError(RelayError):
    status_code = 400


class AuthenticationError(RelayError):
    status_code = 401


class UpstreamError(RelayError):
    """Spotify answered with a non-2xx status or could not be reached.

    `status_code` is the upstream status when a response was received, else 500.
    `body` keeps the upstream response text for server-side logging only.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.upstream_status = status_code
        self.status_code = status_code or 500
        self.body = body
