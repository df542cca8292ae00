"""Delivery sink adapters.

These implement the DeliveryService port without talking to any push
provider: the resolved notification is either logged or written as one JSON
line for a downstream sender to pick up.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence, TextIO

from bbpush.core.models import NotificationPayload, SubscriptionTarget


def serialize_delivery(payload: NotificationPayload, targets: Sequence[SubscriptionTarget]) -> dict[str, Any]:
    """Return the JSON-ready form shared by all sinks."""

    return {
        "payload": payload.to_dict(),
        "targets": [
            {"entity_type": target.entity_type, "entity_id": target.entity_id}
            for target in targets
        ],
    }


class LoggingDelivery:
    """Writes each notification to the log at INFO level."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def send(self, payload: NotificationPayload, targets: Sequence[SubscriptionTarget]) -> None:
        self._logger.info("Notification %s", json.dumps(serialize_delivery(payload, targets), ensure_ascii=False))


class StreamDelivery:
    """Writes each notification as a JSON line to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def send(self, payload: NotificationPayload, targets: Sequence[SubscriptionTarget]) -> None:
        self._stream.write(json.dumps(serialize_delivery(payload, targets), ensure_ascii=False))
        self._stream.write("\n")
        self._stream.flush()
