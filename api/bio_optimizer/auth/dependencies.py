"""Authentication dependencies for FastAPI endpoints."""

import hmac
import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bio_optimizer.auth.api_key import API_KEY_PREFIX, hash_api_key
from bio_optimizer.auth.jwt import decode_access_token
from bio_optimizer.database import get_db
from bio_optimizer.errors import UnauthorizedError
from bio_optimizer.models.user import APIKey, User

logger = logging.getLogger(__name__)


async def _user_from_api_key(db: AsyncSession, x_api_key: str) -> User | None:
    if not x_api_key.startswith(API_KEY_PREFIX):
        return None

    key_hash = hash_api_key(x_api_key)
    result = await db.execute(
        select(APIKey).where(APIKey.key_hash == key_hash).where(APIKey.revoked_at.is_(None))
    )
    api_key = result.scalar_one_or_none()

    if api_key is None:
        # Keep the miss path as slow as the hit path
        hmac.compare_digest(key_hash, "0" * 64)
        return None

    if api_key.expires_at is not None:
        expires_at = api_key.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at < datetime.now(timezone.utc):
            return None

    return await db.get(User, api_key.user_id)


async def _user_from_bearer(db: AsyncSession, authorization: str) -> User | None:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None

    subject = decode_access_token(token.strip())
    if subject is None:
        return None

    try:
        user_id = UUID(subject)
    except ValueError:
        return None
    return await db.get(User, user_id)


async def resolve_caller(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """
    Resolve the current user from request credentials.

    Accepts an ``X-API-Key`` header or an ``Authorization: Bearer`` access
    token. Returns None when no valid credential is present; rejecting the
    request is left to ``require_caller`` so each operation decides.
    """
    if x_api_key:
        user = await _user_from_api_key(db, x_api_key)
        if user is None:
            logger.warning("Rejected API key with prefix %s", x_api_key[:12])
        return user

    if authorization:
        return await _user_from_bearer(db, authorization)

    return None


def require_caller(caller: User | None) -> User:
    """
    Return the authenticated caller.

    Raises:
        UnauthorizedError: if there is no caller
    """
    if caller is None:
        raise UnauthorizedError()
    return caller
