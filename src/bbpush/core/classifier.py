"""Eligibility checks for forum content (core domain)."""

from __future__ import annotations

from bbpush.core.models import STATUS_PUBLISH, ContentItem, ContentKind

RECOGNIZED_KINDS = frozenset({ContentKind.POST, ContentKind.COMMENT})


class ContentClassifier:
    """Decides whether an item is a published topic or reply."""

    def is_eligible(self, item: ContentItem) -> bool:
        if item.kind not in RECOGNIZED_KINDS:
            return False
        return item.status == STATUS_PUBLISH

    def object_type(self, item: ContentItem) -> str:
        """Return the raw post type, or an empty string for unknown kinds."""

        if item.kind in RECOGNIZED_KINDS:
            return item.post_type
        return ""
