"""Bearer token verification.

Tokens are HS256 JWTs whose `sub` claim is the physiotherapist id. Issuing tokens
(login, password checks) belongs to the account service; `create_access_token` exists
for local tooling and tests.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.core.settings import get_settings
from app.domain.exceptions import AuthenticationError
from app.physiotherapists.models import Physiotherapist

bearer_scheme = HTTPBearer(auto_error=False, description="Physiotherapist access token")

# `physiotherapists.id` is a 32-bit INTEGER.
MAX_OWNER_ID = 2**31 - 1


def create_access_token(*, owner_id: int, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(tz=UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {"sub": str(owner_id), "exp": expire}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_owner_id(token: str) -> int:
    """Return the owner id carried by `token`, raising AuthenticationError otherwise."""

    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise AuthenticationError("invalid token") from exc

    subject = claims.get("sub")
    if not isinstance(subject, str) or not (subject.isascii() and subject.isdigit()):
        raise AuthenticationError("invalid subject")

    owner_id = int(subject)
    if owner_id > MAX_OWNER_ID:
        raise AuthenticationError("invalid subject")
    return owner_id


async def get_current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> Physiotherapist:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("missing token")

    owner = await session.get(Physiotherapist, decode_owner_id(credentials.credentials))
    if owner is None or not owner.is_active:
        raise AuthenticationError("unknown owner")
    return owner
