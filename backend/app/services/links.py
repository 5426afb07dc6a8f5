"""Shareable links: slug allocation, public resolution and owner-only edits."""
import logging
import re
from typing import List, Optional, Tuple

from fastapi import HTTPException, status

from app.services.analytics import record_profile_view
from app.store.base import CREATORS, LINKS, DuplicateRecordError, Record, RecordStore

logger = logging.getLogger(__name__)

DEFAULT_BUTTON_TEXT = "Support Me"
DEFAULT_THEME = "default"

# Fields an owner may change on an existing link
EDITABLE_FIELDS = ("title", "description", "button_text", "theme", "is_active")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """'Support My Work!!!' -> 'support-my-work'; falls back to 'link'."""
    slug = _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")
    return slug or "link"


async def _next_free_slug(store: RecordStore, base: str, start: int = 0) -> Tuple[str, int]:
    counter = start
    while True:
        slug = base if counter == 0 else f"{base}-{counter}"
        if not await store.find(LINKS, slug=slug):
            return slug, counter
        counter += 1


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Link not found"
    )


async def create_link(
    store: RecordStore,
    creator_id: str,
    title: str,
    description: Optional[str] = None,
    button_text: Optional[str] = None,
    theme: Optional[str] = None,
) -> Record:
    """
    Create a link with a unique slug derived from the title.

    Taken slugs get a numeric suffix: base, base-1, base-2, ... The insert
    itself enforces uniqueness, so a concurrent request that grabs the same
    slug just moves this one on to the next suffix.
    """
    base = slugify(title)
    counter = 0
    while True:
        slug, counter = await _next_free_slug(store, base, counter)
        try:
            link = await store.add(LINKS, {
                "slug": slug,
                "title": title,
                "description": description,
                "button_text": button_text or DEFAULT_BUTTON_TEXT,
                "theme": theme or DEFAULT_THEME,
                "is_active": True,
                "click_count": 0,
                "creator_id": creator_id,
            }, unique=("slug",))
        except DuplicateRecordError:
            counter += 1
            continue
        logger.info(f"Created link {slug} for creator {creator_id}")
        return link


async def resolve_link(store: RecordStore, slug: str) -> Tuple[Record, Record]:
    """
    Look up an active link and its owner for a public visit.

    Every call counts one click on the link and one profile view plus link
    click on the owner's daily snapshot.
    """
    link = await store.find(LINKS, slug=slug)
    if not link or not link.get("is_active"):
        raise _not_found()

    creator = await store.find(CREATORS, id=link["creator_id"])
    if not creator:
        raise _not_found()

    link = await store.increment(LINKS, link["id"], click_count=1) or link
    await record_profile_view(store, creator["id"], link_click=True)
    return link, creator


async def _owned_link(store: RecordStore, link_id: str, owner_id: str) -> Record:
    link = await store.find(LINKS, id=link_id)
    if not link or link["creator_id"] != owner_id:
        raise _not_found()
    return link


async def update_link(store: RecordStore, link_id: str, owner_id: str, fields: dict) -> Record:
    """Patch the given fields of a link owned by ``owner_id``."""
    await _owned_link(store, link_id, owner_id)
    changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    updated = await store.update(LINKS, link_id, changes)
    if updated is None:
        raise _not_found()
    return updated


async def delete_link(store: RecordStore, link_id: str, owner_id: str) -> None:
    await _owned_link(store, link_id, owner_id)
    if not await store.delete(LINKS, link_id):
        raise _not_found()
    logger.info(f"Deleted link {link_id} of creator {owner_id}")


async def list_links(store: RecordStore, creator_id: str) -> List[Record]:
    links = await store.filter(LINKS, creator_id=creator_id)
    links.sort(key=lambda link: link["created_at"], reverse=True)
    return links
