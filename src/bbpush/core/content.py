"""Excerpt helpers for notification content (core domain)."""

from __future__ import annotations

import html
import re

import bleach

ELLIPSIS = "…"

_SHORTCODE_RE = re.compile(r"\[/?[a-zA-Z][^\]]*\]")
_BLOCK_END_RE = re.compile(r"<\s*(br|/p|/div|/li|/blockquote)\s*/?\s*>", re.IGNORECASE)


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def strip_markup(raw_content: str) -> str:
    """Return plain text with shortcodes, tags, and entities removed."""

    # Keep a gap where block elements ended so words do not run together.
    text = _BLOCK_END_RE.sub(" ", raw_content)
    text = bleach.clean(text, tags=[], attributes={}, strip=True)
    text = _SHORTCODE_RE.sub("", text)
    return _collapse_whitespace(html.unescape(text))


def message_content(raw_content: str, snippet_chars: int) -> str:
    """Return the shortened plain-text form used as the push body."""

    text = strip_markup(raw_content)
    if snippet_chars <= 0 or len(text) <= snippet_chars:
        return text

    clipped = text[:snippet_chars]
    # Prefer cutting at a word boundary when one is reasonably close.
    boundary = clipped.rfind(" ")
    if boundary >= snippet_chars // 2:
        clipped = clipped[:boundary]
    return clipped.rstrip() + ELLIPSIS
