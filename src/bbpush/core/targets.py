"""Subscription target resolution (core domain)."""

from __future__ import annotations

from typing import List

from bbpush.core.config import EntityTypeMap, ThreadingConfig, coerce_bool, coerce_int
from bbpush.core.meta_keys import (
    DEFAULT_THREAD_REPLIES,
    DEFAULT_THREAD_REPLIES_DEPTH,
    META_REPLY_TO,
    OPTION_THREAD_REPLIES,
    OPTION_THREAD_REPLIES_DEPTH,
)
from bbpush.core.models import ContentItem, ContentKind, SubscriptionTarget
from bbpush.core.ports import MetadataStore, OptionsStore


def load_threading_config(options: OptionsStore) -> ThreadingConfig:
    """Snapshot the site threading options."""

    return ThreadingConfig(
        enabled=coerce_bool(options.get(OPTION_THREAD_REPLIES, DEFAULT_THREAD_REPLIES)),
        max_depth=coerce_int(
            options.get(OPTION_THREAD_REPLIES_DEPTH, DEFAULT_THREAD_REPLIES_DEPTH),
            DEFAULT_THREAD_REPLIES_DEPTH,
        ),
    )


def resolve_targets(
    item: ContentItem,
    threading: ThreadingConfig,
    entity_types: EntityTypeMap,
    metadata: MetadataStore,
) -> List[SubscriptionTarget]:
    """Return the single entity that should be notified about ``item``.

    Decision tree:
    - A topic notifies its forum.
    - A reply notifies the reply it answers when threading is on, the depth
      allows nesting, and a reply-to id is stored.
    - Any other reply notifies its topic.
    - Unknown kinds produce no target.
    """

    if item.kind is ContentKind.POST:
        return [SubscriptionTarget(entity_types.section, coerce_int(item.parent_id))]

    if item.kind is ContentKind.COMMENT:
        reply_to = coerce_int(metadata.get(item.id, META_REPLY_TO))
        if threading.allows_reply_targets and reply_to > 0:
            return [SubscriptionTarget(entity_types.comment, reply_to)]
        return [SubscriptionTarget(entity_types.post, coerce_int(item.parent_id))]

    return []


class TargetResolver:
    """Binds the entity type map and metadata store for repeated resolution."""

    def __init__(self, entity_types: EntityTypeMap, metadata: MetadataStore) -> None:
        self._entity_types = entity_types
        self._metadata = metadata

    def resolve_targets(self, item: ContentItem, threading: ThreadingConfig) -> List[SubscriptionTarget]:
        return resolve_targets(item, threading, self._entity_types, self._metadata)
