"""Bearer access tokens for signed-in web sessions."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from bio_optimizer.config import settings

ALGORITHM = "HS256"


def create_access_token(user_id: str, expires_in: timedelta | None = None) -> str:
    """Create a short-lived access token for ``user_id``."""
    expire = datetime.now(timezone.utc) + (
        expires_in or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": user_id,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str | None:
    """
    Validate an access token.

    Returns the subject user id, or None if the token is invalid, expired
    or not an access token.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != "access":
        return None
    return payload.get("sub")
