from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Depends
from fastapi.security import APIKeyHeader
from app.core.config import settings
import structlog

logger = structlog.get_logger()

# auto_error is off so a missing header yields our own 401 instead of a 403
security = APIKeyHeader(name=settings.auth_header_name, auto_error=False)

MISSING_TOKEN_DETAIL = "No token, authorization denied"
INVALID_TOKEN_DETAIL = "Token is not valid"


def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.warning("JWT validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN_DETAIL,
        )

    user_id = payload.get(settings.jwt_user_id_claim)
    if not user_id:
        logger.warning("Token missing user id claim", claim=settings.jwt_user_id_claim)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN_DETAIL,
        )
    return {"user_id": str(user_id), "payload": payload, "token": token}


def validate_request(token: Optional[str] = Depends(security)) -> dict:
    if not token:
        logger.warning("Request without auth token", header=settings.auth_header_name)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_TOKEN_DETAIL,
        )
    return verify_token(token)
