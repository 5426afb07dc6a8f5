"""Schemas for SuiNS validation endpoints."""
from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel


class SuiNSValidateRequest(CamelModel):
    name_or_address: str = Field(..., min_length=1, max_length=255)


class SuiNSValidateResponse(CamelModel):
    input: str
    is_valid: bool
    type: str
    resolved_address: Optional[str] = None
    display_name: Optional[str] = None
    timestamp: datetime


class SuiNSLookupResponse(CamelModel):
    input: str
    type: str
    is_valid: bool
    resolved_address: Optional[str] = None
    resolved_name: Optional[str] = None
    timestamp: datetime
