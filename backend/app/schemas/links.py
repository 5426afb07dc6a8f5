"""Schemas for shareable link endpoints."""
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.creators import PublicCreator


class LinkCreate(CamelModel):
    """Schema for creating a shareable link."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    button_text: Optional[str] = Field(None, max_length=100)
    theme: Optional[str] = Field(None, max_length=50)


class LinkUpdate(CamelModel):
    """Schema for updating a link (partial)."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    button_text: Optional[str] = Field(None, min_length=1, max_length=100)
    theme: Optional[str] = Field(None, min_length=1, max_length=50)
    is_active: Optional[bool] = None


class LinkResponse(CamelModel):
    """Schema for link response."""

    id: str
    slug: str
    title: str
    description: Optional[str] = None
    button_text: str
    theme: str
    is_active: bool
    click_count: int
    creator_id: str
    created_at: datetime
    updated_at: datetime


class LinkListResponse(CamelModel):
    links: List[LinkResponse]


class LinkMutationResponse(CamelModel):
    message: str
    link: LinkResponse


class PublicLinkResponse(CamelModel):
    """A resolved link with its owner's public profile."""

    link: LinkResponse
    creator: PublicCreator
