"""Session token issuing and validation.

Tokens are HS256-signed JWTs carrying the creator identity. There is no
server-side session table: a token stays valid until it expires, and
logging out only discards it on the client.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from app.config import settings
from app.schemas.auth import SessionClaims

logger = logging.getLogger(__name__)


def create_session_token(
    creator_id: str,
    email: str,
    username: str,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed token for a creator, valid for SESSION_TOKEN_EXPIRE_DAYS."""
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(days=settings.SESSION_TOKEN_EXPIRE_DAYS)
    payload = {
        "sub": creator_id,
        "email": email,
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str, now: Optional[datetime] = None) -> Optional[SessionClaims]:
    """
    Verify a token's signature and expiry.

    Returns the embedded claims, or None if the token is malformed, tampered
    with, or expired at ``now`` (defaults to the current time).
    """
    try:
        # Expiry is checked below against ``now``
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError:
        return None

    creator_id = payload.get("sub")
    expires = payload.get("exp")
    issued = payload.get("iat")
    if not creator_id or not isinstance(expires, (int, float)):
        return None

    current = now or datetime.now(timezone.utc)
    if current.timestamp() >= expires:
        return None

    return SessionClaims(
        creator_id=creator_id,
        email=payload.get("email", ""),
        username=payload.get("username", ""),
        issued_at=datetime.fromtimestamp(issued or 0, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
    )


def revoke_session_token(token: str) -> None:
    """Logging out is client-side only; the token remains valid until expiry."""
    claims = decode_session_token(token)
    if claims:
        logger.info(f"Session ended for creator {claims.creator_id}")
