from __future__ import annotations

from jose import jwt

from app.core.config import settings

USER_ID = "user-123"


def make_token(claims: dict | None = None, secret: str | None = None) -> str:
    payload = {settings.jwt_user_id_claim: USER_ID} if claims is None else claims
    return jwt.encode(payload, secret or settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
