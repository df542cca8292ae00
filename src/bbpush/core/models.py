"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to WordPress row shapes or any delivery-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Optional

STATUS_PUBLISH = "publish"


class ContentKind(Enum):
    """Closed set of content kinds, decided once when an item is built."""

    POST = "post"
    COMMENT = "comment"
    OTHER = "other"


@dataclass(frozen=True)
class ContentItem:
    """A published topic or reply, as seen by the core."""

    id: int
    kind: ContentKind
    post_type: str
    author_id: int
    title: str
    raw_content: str
    status: str
    parent_id: int
    post_name: str = ""

    @property
    def is_anonymous(self) -> bool:
        return self.author_id <= 0


class SubscriptionTarget(NamedTuple):
    """Entity whose subscribers receive the notification."""

    entity_type: str
    entity_id: int


@dataclass(frozen=True)
class NotificationPayload:
    """Structured push payload for one published item."""

    id: int
    username: str
    user_id: int
    title: str
    content: str
    parent_post_title: str
    parent_section_title: str

    def to_dict(self) -> dict[str, Any]:
        """Return the payload keyed the way push consumers expect it."""

        return {
            "id": self.id,
            "username": self.username,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "post__title": self.parent_post_title,
            "section__title": self.parent_section_title,
        }


@dataclass(frozen=True)
class ContentSaveEvent:
    """One "content saved" notification from the hosting event system.

    ``origin`` is ``"rest"`` for programmatic writes and ``None`` when the
    runtime cannot tell where the write came from.
    """

    content_id: int
    content: ContentItem
    is_update: bool
    is_autosave: bool = False
    is_revision: bool = False
    origin: Optional[str] = None


@dataclass(frozen=True)
class Delivery:
    """What the pipeline handed to the delivery service."""

    payload: NotificationPayload
    targets: tuple[SubscriptionTarget, ...]
