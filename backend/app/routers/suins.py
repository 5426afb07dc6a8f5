"""SuiNS name and address validation router."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas.suins import SuiNSLookupResponse, SuiNSValidateRequest, SuiNSValidateResponse
from app.services.sui import SuiClient, get_sui_client

router = APIRouter()


@router.post("/validate", response_model=SuiNSValidateResponse)
async def validate(data: SuiNSValidateRequest, sui: SuiClient = Depends(get_sui_client)):
    """Classify input as an address or a SuiNS name and resolve it."""
    result = await sui.names.validate_and_resolve_name(data.name_or_address)
    return {
        "input": data.name_or_address,
        "is_valid": result["isValid"],
        "type": result["type"],
        "resolved_address": result.get("resolvedAddress"),
        "display_name": result.get("displayName"),
        "timestamp": datetime.utcnow(),
    }


@router.get("/validate", response_model=SuiNSLookupResponse)
async def lookup(
    name: Optional[str] = Query(None),
    address: Optional[str] = Query(None),
    sui: SuiClient = Depends(get_sui_client),
):
    """Forward lookup with ?name=, reverse lookup with ?address= (name wins)."""
    if name:
        resolved = await sui.names.resolve_name(name)
        return {
            "input": name,
            "type": "name_resolution",
            "resolved_address": resolved,
            "is_valid": resolved is not None,
            "timestamp": datetime.utcnow(),
        }
    if address:
        resolved_name = await sui.names.get_name_by_address(address)
        return {
            "input": address,
            "type": "reverse_lookup",
            "resolved_name": resolved_name,
            "is_valid": resolved_name is not None,
            "timestamp": datetime.utcnow(),
        }

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Either name or address parameter is required"
    )
