"""Authentication router for creator registration, login, and logout."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import security
from app.auth.security import create_session_token, revoke_session_token
from app.config import settings
from app.rate_limit import limiter
from app.schemas.auth import AuthResponse, CreatorLogin, CreatorRegister
from app.schemas.common import MessageResponse
from app.services.sui import SuiClient, SuiNameService, get_sui_client
from app.store.base import CREATORS, DuplicateRecordError, RecordStore
from app.store.factory import get_store

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_MESSAGES = {
    "email": "Creator with this email already exists",
    "username": "Creator with this username already exists",
    "wallet_address": "Creator with this wallet address already exists",
}


def _token_for(creator: dict) -> str:
    return create_session_token(creator["id"], creator["email"], creator["username"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(lambda: settings.RATE_LIMIT_REGISTER)
async def register(
    request: Request,
    data: CreatorRegister,
    store: RecordStore = Depends(get_store),
    sui: SuiClient = Depends(get_sui_client),
):
    """
    Register a new creator.

    - Validates the wallet address format
    - Checks that a given SuiNS name resolves to that wallet
    - Inserts atomically against email, username and wallet uniqueness
    - Returns the creator with a session token
    """
    if not SuiNameService.validate_sui_address(data.wallet_address):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid wallet address"
        )
    wallet_address = SuiNameService.normalize_sui_address(data.wallet_address)

    if data.sui_name_service:
        resolved = await sui.names.resolve_name(data.sui_name_service)
        if resolved and SuiNameService.normalize_sui_address(resolved) != wallet_address:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="SUI Name Service does not resolve to provided wallet address"
            )

    try:
        creator = await store.add(CREATORS, {
            "email": data.email.lower(),
            "username": data.username,
            "display_name": data.display_name,
            "wallet_address": wallet_address,
            "sui_name_service": data.sui_name_service.lower() if data.sui_name_service else None,
            "bio": data.bio,
            "avatar": data.avatar,
            "twitter_handle": None,
            "website_url": None,
            "custom_message": None,
            "is_verified": False,
            "min_donation_amount": 1.0,
        }, unique=("email", "username", "wallet_address"))
    except DuplicateRecordError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_MESSAGES.get(e.field, "Creator already exists")
        )

    logger.info(f"Registered creator {creator['username']} ({creator['id']})")
    return {
        "message": "Creator registered successfully",
        "creator": creator,
        "token": _token_for(creator),
    }


@router.post("/login", response_model=AuthResponse)
async def login(credentials: CreatorLogin, store: RecordStore = Depends(get_store)):
    """
    Login with an email or a wallet address.

    Email takes precedence when both are given.
    """
    if credentials.email:
        creator = await store.find(CREATORS, email=credentials.email.lower())
    elif credentials.wallet_address:
        creator = await store.find(
            CREATORS,
            wallet_address=SuiNameService.normalize_sui_address(credentials.wallet_address),
        )
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email or wallet address is required"
        )

    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Creator not found"
        )

    return {
        "message": "Login successful",
        "creator": creator,
        "token": _token_for(creator),
    }


@router.post("/logout", response_model=MessageResponse)
async def logout(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Succeeds whether or not a valid token was sent."""
    if credentials is not None:
        revoke_session_token(credentials.credentials)
    return {"message": "Logout successful"}
