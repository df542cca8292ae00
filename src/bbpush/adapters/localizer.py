"""gettext-backed Localizer adapter for the ``bb-app`` text domain."""

from __future__ import annotations

import gettext
from typing import Optional, Sequence

TEXT_DOMAIN = "bb-app"


class GettextLocalizer:
    """Translate literals through a compiled catalog, falling back to the literal."""

    def __init__(
        self,
        locale_dir: Optional[str] = None,
        languages: Optional[Sequence[str]] = None,
        domain: str = TEXT_DOMAIN,
    ) -> None:
        self._translations = gettext.translation(
            domain,
            localedir=locale_dir,
            languages=list(languages) if languages else None,
            fallback=True,
        )

    def translate(self, literal: str) -> str:
        return self._translations.gettext(literal)
