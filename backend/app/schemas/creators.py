"""Creator profile schemas."""
from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel


class CreatorResponse(CamelModel):
    """Full creator record, returned to the creator themself."""

    id: str
    email: str
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    wallet_address: str
    sui_name_service: Optional[str] = None
    is_verified: bool = False
    twitter_handle: Optional[str] = None
    website_url: Optional[str] = None
    min_donation_amount: float = 1.0
    custom_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CreatorCounts(CamelModel):
    payments: int
    links: int


class CreatorProfile(CreatorResponse):
    """Creator record with related-object counts."""

    counts: CreatorCounts


class CreatorProfileResponse(CamelModel):
    creator: CreatorProfile


class CreatorUpdate(CamelModel):
    """Partial profile update; omitted fields are left unchanged."""

    display_name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = Field(None, max_length=2000)
    avatar: Optional[str] = Field(None, max_length=1024)
    twitter_handle: Optional[str] = Field(None, max_length=255)
    website_url: Optional[str] = Field(None, max_length=1024)
    min_donation_amount: Optional[float] = Field(None, gt=0)
    custom_message: Optional[str] = Field(None, max_length=2000)


class CreatorUpdateResponse(CamelModel):
    message: str
    creator: CreatorResponse


class PublicCreator(CamelModel):
    """Public projection of a creator: no email, no timestamps beyond creation."""

    id: str
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    wallet_address: str
    sui_name_service: Optional[str] = None
    min_donation_amount: float = 1.0
    custom_message: Optional[str] = None
    twitter_handle: Optional[str] = None
    website_url: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None
