"""Public router: creator pages and shareable links, no authentication."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.links import PublicLinkResponse
from app.schemas.public import PublicCreatorResponse
from app.services.analytics import record_profile_view
from app.services.links import resolve_link
from app.store.base import CREATORS, PAYMENTS, RecordStore
from app.store.factory import get_store

router = APIRouter()

RECENT_PUBLIC_PAYMENTS = 5


@router.get("/creator/{username}", response_model=PublicCreatorResponse)
async def get_public_creator(username: str, store: RecordStore = Depends(get_store)):
    """
    Public creator page.

    Returns the profile, the latest non-anonymous tips and lifetime totals,
    and counts a profile view.
    """
    creator = await store.find(CREATORS, username=username.lower())
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Creator not found"
        )

    payments = await store.filter(PAYMENTS, creator_id=creator["id"])
    recent = sorted(
        (p for p in payments if not p["is_anonymous"]),
        key=lambda p: p["timestamp"],
        reverse=True,
    )[:RECENT_PUBLIC_PAYMENTS]

    await record_profile_view(store, creator["id"])

    return {
        "creator": creator,
        "recent_payments": recent,
        "stats": {
            "total_amount": sum(p["amount"] for p in payments),
            "total_payments": len(payments),
        },
    }


@router.get("/link/{slug}", response_model=PublicLinkResponse)
async def get_public_link(slug: str, store: RecordStore = Depends(get_store)):
    """Resolve a shareable link; each call counts one click."""
    link, creator = await resolve_link(store, slug)
    return {"link": link, "creator": creator}
