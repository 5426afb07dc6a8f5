"""FastAPI dependencies for authentication."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.security import decode_session_token
from app.store.base import CREATORS, Record, RecordStore
from app.store.factory import get_store

security = HTTPBearer(auto_error=False)


async def get_current_creator(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: RecordStore = Depends(get_store),
) -> Record:
    """
    FastAPI dependency to extract and validate the current creator from the Bearer token.
    Raises HTTPException if the token is missing, invalid, expired, or the creator is gone.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = decode_session_token(credentials.credentials)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    creator = await store.find(CREATORS, id=claims.creator_id)
    if creator is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Creator not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return creator
