"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for the site lookups, localization, event
source, and delivery adapters so that the core can be reused with different
backends.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence

from bbpush.core.models import ContentSaveEvent, NotificationPayload, SubscriptionTarget


class User(Protocol):
    display_name: str


class UserDirectory(Protocol):
    """User lookups required by the message extractor."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...


class MetadataStore(Protocol):
    """Per-content key/value metadata (post meta)."""

    def get(self, content_id: int, key: str) -> Any:
        ...


class OptionsStore(Protocol):
    """Site-wide options."""

    def get(self, key: str, default: Any = None) -> Any:
        ...


class TitleResolver(Protocol):
    def get_title(self, content_id: int) -> str:
        ...


class Localizer(Protocol):
    def translate(self, literal: str) -> str:
        ...


class EventSource(Protocol):
    """Emits content-save events to subscribed callbacks."""

    def subscribe(self, callback: Callable[[ContentSaveEvent], Any]) -> None:
        ...


class DeliveryService(Protocol):
    """Outbound sink for resolved notifications."""

    def send(self, payload: NotificationPayload, targets: Sequence[SubscriptionTarget]) -> None:
        ...
