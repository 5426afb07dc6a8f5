"""Authentication schemas for creator registration, login, and sessions."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import CamelModel
from app.schemas.creators import CreatorResponse


class CreatorRegister(CamelModel):
    """Schema for creator registration."""

    email: EmailStr
    username: str = Field(..., min_length=1, max_length=64)
    display_name: str = Field(..., min_length=1, max_length=255)
    wallet_address: str = Field(..., min_length=1, max_length=66)
    sui_name_service: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = Field(None, max_length=2000)
    avatar: Optional[str] = Field(None, max_length=1024)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        """Usernames are stored lowercase."""
        return v.strip().lower()


class CreatorLogin(CamelModel):
    """Schema for creator login: either email or wallet address."""

    email: Optional[EmailStr] = None
    wallet_address: Optional[str] = None


class AuthResponse(CamelModel):
    """Creator record plus a fresh session token."""

    message: str
    creator: CreatorResponse
    token: str


class SessionClaims(BaseModel):
    """Identity claims embedded in a session token."""

    creator_id: str
    email: str
    username: str
    issued_at: datetime
    expires_at: datetime
