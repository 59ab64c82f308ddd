"""JWT helpers that turn bearer tokens into an identity gate."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from admissions.core.config import Settings, get_settings
from admissions.modules.identity import ANONYMOUS, Identity, IdentityGate

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(
    identity_id: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Issue a token the way the identity provider does; used by tooling and tests."""
    settings = settings or get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": identity_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> Identity | None:
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        logger.info("Rejected bearer token: %s", exc)
        return None

    identity_id = payload.get("sub")
    if not identity_id:
        return None
    return Identity(id=str(identity_id), email=payload.get("email"))


async def get_identity_gate(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> IdentityGate:
    """Unauthenticated callers get an empty gate; services decide when identity is required."""
    if credentials is None:
        return ANONYMOUS
    identity = decode_access_token(credentials.credentials)
    if identity is None:
        return ANONYMOUS
    return IdentityGate(identity=identity)


__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_identity_gate",
]
