"""Core exceptions."""

from __future__ import annotations


class InvalidContentKind(ValueError):
    """Raised when a payload is requested for something that is not a topic or reply."""

    def __init__(self, post_type: str) -> None:
        super().__init__(f"Cannot build a push message for content type: {post_type!r}")
        self.post_type = post_type
