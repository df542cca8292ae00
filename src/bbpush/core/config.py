"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

from bbpush.core.models import ContentKind

ROLE_SECTION = "section"
ROLE_POST = "post"
ROLE_COMMENT = "comment"

# PHP's (bool) cast: only "" and "0" are falsy strings, so "false" is true.
_FALSE_STRINGS = {"", "0"}


@dataclass(frozen=True)
class EntityTypeMap:
    """Concrete post types behind the abstract forum roles."""

    section: str = "forum"
    post: str = "topic"
    comment: str = "reply"

    def get(self, role: str) -> str:
        if role == ROLE_SECTION:
            return self.section
        if role == ROLE_POST:
            return self.post
        if role == ROLE_COMMENT:
            return self.comment
        raise ValueError(f"Unsupported entity role: {role}")

    def classify(self, post_type: str) -> ContentKind:
        """Return the content kind for a raw post type."""

        if post_type == self.post:
            return ContentKind.POST
        if post_type == self.comment:
            return ContentKind.COMMENT
        return ContentKind.OTHER


@dataclass(frozen=True)
class ThreadingConfig:
    """Site-wide reply threading settings, read once per invocation."""

    enabled: bool
    max_depth: int

    @property
    def allows_reply_targets(self) -> bool:
        # A depth of 1 shows no nesting, so replies collapse to the topic.
        return self.enabled and self.max_depth > 1


@dataclass(frozen=True)
class NotificationConfig:
    """Payload settings consumed by the message extractor."""

    snippet_chars: int = 400


def coerce_bool(value: object) -> bool:
    """Cast a stored option value to bool the way WordPress options behave."""

    if isinstance(value, str):
        return value not in _FALSE_STRINGS
    return bool(value)


def coerce_int(value: object, default: int = 0) -> int:
    """Cast a stored value to int, falling back when it is missing or junk."""

    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return default
