"""Core notification pipeline.

This module is integration-agnostic. It only relies on ports for site lookups
and delivery, enabling other event sources or sinks without changes here.
"""

from __future__ import annotations

import logging
from typing import Optional

from bbpush.core.classifier import ContentClassifier
from bbpush.core.extractor import MessageExtractor
from bbpush.core.gate import InsertionGate
from bbpush.core.models import ContentItem, ContentSaveEvent, Delivery
from bbpush.core.ports import DeliveryService, EventSource, OptionsStore
from bbpush.core.targets import TargetResolver, load_threading_config

LOGGER = logging.getLogger(__name__)


class NotificationPipeline:
    """Orchestrates gating, classification, extraction, resolution, and delivery."""

    def __init__(
        self,
        gate: InsertionGate,
        classifier: ContentClassifier,
        extractor: MessageExtractor,
        resolver: TargetResolver,
        options: OptionsStore,
        delivery: DeliveryService,
    ) -> None:
        self._gate = gate
        self._classifier = classifier
        self._extractor = extractor
        self._resolver = resolver
        self._options = options
        self._delivery = delivery

    def register(self, source: EventSource) -> None:
        """Subscribe this pipeline to content-save events."""

        source.subscribe(self.handle)

    def handle(self, event: ContentSaveEvent) -> Optional[Delivery]:
        """Process one content-save event through the pipeline."""

        if not self._gate.accept(event):
            return None
        return self.handle_content_insertion(event.content)

    def handle_content_insertion(self, item: ContentItem) -> Optional[Delivery]:
        """Notify about a freshly inserted item that already passed the gate."""

        if not self._classifier.is_eligible(item):
            LOGGER.debug("Content %s is not eligible (status=%s)", item.id, item.status)
            return None

        payload = self._extractor.extract_message(item)

        # Options are read per invocation so a site change applies to the next post.
        threading = load_threading_config(self._options)
        targets = tuple(self._resolver.resolve_targets(item, threading))
        if not targets:
            return None

        self._delivery.send(payload, targets)
        LOGGER.info(
            "Push queued for %s %s -> %s",
            self._classifier.object_type(item),
            item.id,
            ", ".join(f"{target.entity_type}:{target.entity_id}" for target in targets),
        )
        return Delivery(payload=payload, targets=targets)
