"""Creator dashboard router: profile, links, payment history and analytics."""
from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.dependencies import get_current_creator
from app.schemas.analytics import AnalyticsOverviewResponse, PaymentSeriesResponse, TopDonorsResponse
from app.schemas.common import MessageResponse
from app.schemas.creators import CreatorProfileResponse, CreatorUpdate, CreatorUpdateResponse
from app.schemas.links import LinkCreate, LinkListResponse, LinkMutationResponse, LinkUpdate
from app.schemas.payments import PaymentListResponse
from app.services import links as link_service
from app.services.analytics import get_creator_analytics, get_payment_series, get_top_donors
from app.services.payments import paginate_payments
from app.store.base import CREATORS, LINKS, PAYMENTS, Record, RecordStore
from app.store.factory import get_store

router = APIRouter()

ANALYTICS_TYPES = ("overview", "payments", "donors")


@router.get("/profile", response_model=CreatorProfileResponse)
async def get_profile(
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    """Current creator with payment and link counts."""
    payments = await store.filter(PAYMENTS, creator_id=creator["id"])
    links = await store.filter(LINKS, creator_id=creator["id"])
    return {
        "creator": {
            **creator,
            "counts": {"payments": len(payments), "links": len(links)},
        }
    }


@router.put("/profile", response_model=CreatorUpdateResponse)
async def update_profile(
    data: CreatorUpdate,
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    """Partial update; only fields present in the body are changed."""
    updates = data.model_dump(exclude_unset=True)
    # Fields that must not be cleared
    for field in ("display_name", "min_donation_amount"):
        if updates.get(field) is None:
            updates.pop(field, None)

    updated = await store.update(CREATORS, creator["id"], updates)
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Creator not found"
        )
    return {"message": "Profile updated successfully", "creator": updated}


@router.get("/links", response_model=LinkListResponse)
async def list_links(
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    return {"links": await link_service.list_links(store, creator["id"])}


@router.post("/links", response_model=LinkMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    data: LinkCreate,
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    link = await link_service.create_link(
        store,
        creator["id"],
        title=data.title,
        description=data.description,
        button_text=data.button_text,
        theme=data.theme,
    )
    return {"message": "Link created successfully", "link": link}


@router.put("/links/{link_id}", response_model=LinkMutationResponse)
async def update_link(
    link_id: str,
    data: LinkUpdate,
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    fields = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k == "description"}
    link = await link_service.update_link(store, link_id, creator["id"], fields)
    return {"message": "Link updated successfully", "link": link}


@router.delete("/links/{link_id}", response_model=MessageResponse)
async def delete_link(
    link_id: str,
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    await link_service.delete_link(store, link_id, creator["id"])
    return {"message": "Link deleted successfully"}


@router.get("/payments", response_model=PaymentListResponse)
async def list_payments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    """
    Paginated payment history, newest first.

    startDate/endDate are inclusive bounds on the payment timestamp.
    """
    return await paginate_payments(
        store,
        creator["id"],
        page=page,
        limit=limit,
        start_date=_naive_utc(start_date),
        end_date=_naive_utc(end_date),
    )


@router.get(
    "/analytics",
    response_model=Union[AnalyticsOverviewResponse, PaymentSeriesResponse, TopDonorsResponse],
)
async def get_analytics(
    period: int = Query(30, ge=1, le=365),
    type: str = Query("overview"),
    creator: Record = Depends(get_current_creator),
    store: RecordStore = Depends(get_store),
):
    """
    Rolling-window analytics over the last ``period`` days.

    - overview: totals, recent payments, daily chart and stored snapshots
    - payments: per-day count, total, average and distinct donors
    - donors: top ten non-anonymous donors by total amount
    """
    if type == "overview":
        data = await get_creator_analytics(store, creator["id"], period)
        return AnalyticsOverviewResponse.model_validate(data)
    if type == "payments":
        series = await get_payment_series(store, creator["id"], period)
        return PaymentSeriesResponse.model_validate({"payments": series})
    if type == "donors":
        donors = await get_top_donors(store, creator["id"], period)
        return TopDonorsResponse.model_validate({"top_donors": donors})

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Invalid analytics type"
    )


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive UTC; drop the offset after converting."""
    if value is None or value.tzinfo is None:
        return value
    return datetime.utcfromtimestamp(value.timestamp())
