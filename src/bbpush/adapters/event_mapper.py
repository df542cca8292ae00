"""WordPress-to-core mapping adapter.

This keeps WordPress row shapes (``post_type``, ``post_parent``, ...) out of
the core pipeline.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from bbpush.core.config import EntityTypeMap, coerce_bool, coerce_int
from bbpush.core.models import ContentItem, ContentSaveEvent

REVISION_POST_TYPE = "revision"


def build_content_item(record: Mapping[str, Any], entity_types: EntityTypeMap) -> ContentItem:
    """Build a core ContentItem from a ``wp_posts``-shaped record."""

    post_type = str(record.get("post_type") or "")
    return ContentItem(
        id=coerce_int(record.get("ID", record.get("id"))),
        kind=entity_types.classify(post_type),
        post_type=post_type,
        author_id=coerce_int(record.get("post_author")),
        title=str(record.get("post_title") or ""),
        raw_content=str(record.get("post_content") or ""),
        status=str(record.get("post_status") or ""),
        parent_id=coerce_int(record.get("post_parent")),
        post_name=str(record.get("post_name") or ""),
    )


def is_revision(item: ContentItem) -> bool:
    return item.post_type == REVISION_POST_TYPE


def is_autosave(item: ContentItem) -> bool:
    """Autosaves are revisions named ``<parent>-autosave-v1``."""

    if not is_revision(item):
        return False
    return f"{item.parent_id}-autosave" in item.post_name


def _optional_flag(raw: Mapping[str, Any], key: str) -> Optional[bool]:
    if key not in raw or raw[key] is None:
        return None
    return coerce_bool(raw[key])


def build_event(raw: Mapping[str, Any], entity_types: EntityTypeMap) -> ContentSaveEvent:
    """Build a ContentSaveEvent from a ``wp_insert_post`` hook record.

    Expected shape::

        {"post_id": 55, "post": {...}, "update": false, "origin": "admin"}

    Explicit ``is_autosave``/``is_revision`` flags win over values derived
    from the post row.
    """

    post = raw.get("post")
    if not isinstance(post, Mapping):
        raise ValueError("Event is missing the 'post' record")

    item = build_content_item(post, entity_types)
    content_id = coerce_int(raw.get("post_id"), item.id)

    autosave = _optional_flag(raw, "is_autosave")
    revision = _optional_flag(raw, "is_revision")
    origin = raw.get("origin")

    return ContentSaveEvent(
        content_id=content_id,
        content=item,
        is_update=coerce_bool(raw.get("update", False)),
        is_autosave=is_autosave(item) if autosave is None else autosave,
        is_revision=is_revision(item) if revision is None else revision,
        origin=str(origin).lower() if origin else None,
    )
