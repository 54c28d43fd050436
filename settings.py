# settings.py
# Process-wide configuration, read once at startup

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    client_id: str = ""
    client_secret: str = ""
    # IMPORTANT: This MUST match the Redirect URI registered in the Spotify App settings
    redirect_uri: str = ""
    frontend_url: str = "http://localhost:3000"
    port: int = 3001
    token_auth: str = "basic"  # "basic" header or "body" form fields
    ssl_keyfile: Optional[str] = None
    ssl_certfile: Optional[str] = None

    @property
    def https_enabled(self) -> bool:
        return bool(self.ssl_keyfile and self.ssl_certfile)


def load_settings() -> Settings:
    """Build Settings from the environment (and a local .env file, if any)."""
    load_dotenv()
    token_auth = os.getenv("SPOTIFY_TOKEN_AUTH", "basic").strip().lower()
    if token_auth not in ("basic", "body"):
        token_auth = "basic"
    return Settings(
        client_id=os.getenv("SPOTIFY_CLIENT_ID", "").strip(),
        client_secret=os.getenv("SPOTIFY_CLIENT_SECRET", "").strip(),
        redirect_uri=os.getenv("SPOTIFY_REDIRECT_URI", "").strip(),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000").strip(),
        port=int(os.getenv("PORT", "3001")),
        token_auth=token_auth,
        ssl_keyfile=os.getenv("SSL_KEYFILE") or None,
        ssl_certfile=os.getenv("SSL_CERTFILE") or None,
    )
