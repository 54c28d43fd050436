# models.py
# Request/response shapes for the routes that do not relay Spotify verbatim

from typing import Optional

from pydantic import BaseModel


class CallbackReq(BaseModel):
    code: Optional[str] = None


class AuthUrlOut(BaseModel):
    authUrl: str


class TokenOut(BaseModel):
    access_token: str
    expires_in: Optional[int] = None
    token_type: Optional[str] = None


class HealthOut(BaseModel):
    status: str = "OK"
    message: str = "Spotify Stats API is running"
