"""Push payload extraction (core domain)."""

from __future__ import annotations

from bbpush.core.config import NotificationConfig, coerce_int
from bbpush.core.content import message_content
from bbpush.core.errors import InvalidContentKind
from bbpush.core.meta_keys import META_ANONYMOUS_NAME, META_FORUM_ID, META_TOPIC_ID
from bbpush.core.models import ContentItem, ContentKind, NotificationPayload
from bbpush.core.ports import Localizer, MetadataStore, TitleResolver, UserDirectory

ANONYMOUS_LITERAL = "Anonymous"


class MessageExtractor:
    """Builds the notification payload for a topic or reply."""

    def __init__(
        self,
        users: UserDirectory,
        metadata: MetadataStore,
        titles: TitleResolver,
        localizer: Localizer,
        config: NotificationConfig = NotificationConfig(),
    ) -> None:
        self._users = users
        self._metadata = metadata
        self._titles = titles
        self._localizer = localizer
        self._config = config

    def extract_message(self, item: ContentItem) -> NotificationPayload:
        """Return the payload for ``item``.

        Raises InvalidContentKind for anything other than a topic or reply;
        callers are expected to classify first.
        """

        if item.kind not in (ContentKind.POST, ContentKind.COMMENT):
            raise InvalidContentKind(item.post_type)

        return NotificationPayload(
            id=item.id,
            username=self._resolve_username(item),
            user_id=coerce_int(item.author_id),
            title=item.title or "",
            content=message_content(item.raw_content or "", self._config.snippet_chars),
            parent_post_title=self._title_from_meta(item.id, META_TOPIC_ID),
            parent_section_title=self._title_from_meta(item.id, META_FORUM_ID),
        )

    def _resolve_username(self, item: ContentItem) -> str:
        username = ""
        if not item.is_anonymous:
            user = self._users.get_by_id(item.author_id)
            if user is not None:
                username = user.display_name or ""
        else:
            username = self._metadata.get(item.id, META_ANONYMOUS_NAME) or ""

        if not username:
            return self._localizer.translate(ANONYMOUS_LITERAL)
        return str(username)

    def _title_from_meta(self, content_id: int, key: str) -> str:
        parent_id = coerce_int(self._metadata.get(content_id, key))
        if parent_id <= 0:
            return ""
        return self._titles.get_title(parent_id) or ""
