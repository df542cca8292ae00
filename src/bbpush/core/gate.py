"""Insertion event filtering (core domain)."""

from __future__ import annotations

import logging
from typing import Optional

from bbpush.core.meta_keys import ORIGIN_REST
from bbpush.core.models import ContentKind, ContentSaveEvent

LOGGER = logging.getLogger(__name__)


def rejection_reason(event: ContentSaveEvent) -> Optional[str]:
    """Return why ``event`` is not a new publication, or None if it is."""

    if event.is_update:
        return "update"
    if event.content.kind not in (ContentKind.POST, ContentKind.COMMENT):
        return "unsupported type"
    if event.is_autosave:
        return "autosave"
    if event.is_revision:
        return "revision"
    # Unknown origin means the runtime cannot tell; the check is skipped.
    if (event.origin or "").strip().lower() == ORIGIN_REST:
        return "rest origin"
    return None


class InsertionGate:
    """Stateless filter that lets only first-time publications through."""

    def accept(self, event: ContentSaveEvent) -> bool:
        reason = rejection_reason(event)
        if reason is not None:
            LOGGER.debug("Skipping content %s (%s)", event.content_id, reason)
            return False
        return True
