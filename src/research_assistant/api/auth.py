"""JWT authentication for the research API."""

from __future__ import annotations

import hashlib
import hmac
import time

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from research_assistant.config.settings import Settings
from research_assistant.observability.logger import get_logger

logger = get_logger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])
security = HTTPBearer()


class TokenRequest(BaseModel):
    api_key: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def configured_api_keys(settings: Settings) -> list[str]:
    return [k.strip() for k in settings.api_keys.split(",") if k.strip()]


def key_subject(api_key: str) -> str:
    """Stable, non-reversible token subject for an API key."""
    return hashlib.sha256(api_key.encode()).hexdigest()[:16]


def issue_token(api_key: str, settings: Settings) -> TokenResponse:
    now = int(time.time())
    payload = {
        "sub": key_subject(api_key),
        "iat": now,
        "exp": now + settings.jwt_expiry_minutes * 60,
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return TokenResponse(access_token=token, expires_in=settings.jwt_expiry_minutes * 60)


@router.post("/token", response_model=TokenResponse)
async def create_token(
    body: TokenRequest,
    settings: Settings = Depends(_get_settings),
) -> TokenResponse:
    """Exchange an API key for a JWT token."""
    valid_keys = configured_api_keys(settings)
    if not valid_keys:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication not configured",
        )

    if not any(hmac.compare_digest(body.api_key, k) for k in valid_keys):
        logger.warning("invalid_api_key_attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )

    logger.info("token_issued", expiry_minutes=settings.jwt_expiry_minutes)
    return issue_token(body.api_key, settings)


async def verify_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """FastAPI dependency: validate JWT from Authorization header."""
    settings: Settings = request.app.state.settings
    try:
        return jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
