"""JSON-lines event source adapter.

Replays ``wp_insert_post`` records, one JSON object per line, into the
subscribed callbacks. Events are handled strictly in order.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List

from bbpush.adapters.event_mapper import build_event
from bbpush.core.config import EntityTypeMap
from bbpush.core.models import ContentSaveEvent

LOGGER = logging.getLogger(__name__)


@dataclass
class ReplayStats:
    lines: int = 0
    events: int = 0
    malformed: int = 0
    failed: int = 0


class JsonlEventSource:
    """EventSource that reads events from an iterable of text lines."""

    def __init__(self, lines: Iterable[str], entity_types: EntityTypeMap) -> None:
        self._lines = lines
        self._entity_types = entity_types
        self._callbacks: List[Callable[[ContentSaveEvent], Any]] = []

    def subscribe(self, callback: Callable[[ContentSaveEvent], Any]) -> None:
        self._callbacks.append(callback)

    def run(self) -> ReplayStats:
        """Dispatch every line to the subscribers and return counters."""

        stats = ReplayStats()
        for line_number, line in enumerate(self._lines, start=1):
            if not line.strip():
                continue
            stats.lines += 1
            try:
                raw = json.loads(line)
                if not isinstance(raw, dict):
                    raise ValueError("Event line is not a JSON object")
                event = build_event(raw, self._entity_types)
            except ValueError:
                # json.JSONDecodeError is a ValueError too.
                LOGGER.warning("Skipping malformed event on line %s", line_number, exc_info=True)
                stats.malformed += 1
                continue

            stats.events += 1
            for callback in self._callbacks:
                # One bad event must not stop the replay.
                try:
                    callback(event)
                except Exception:
                    LOGGER.exception("Error while processing event on line %s", line_number)
                    stats.failed += 1
        return stats
