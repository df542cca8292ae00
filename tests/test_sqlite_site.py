from __future__ import annotations

from pathlib import Path

from bbpush.adapters.sqlite_site import SiteUser, SQLiteSite
from bbpush.core.classifier import ContentClassifier
from bbpush.core.config import EntityTypeMap, ThreadingConfig
from bbpush.core.extractor import MessageExtractor
from bbpush.core.models import ContentKind, SubscriptionTarget
from bbpush.core.targets import TargetResolver, load_threading_config

SNAPSHOT = {
    "users": [{"id": 7, "display_name": "Mara Quill"}],
    "posts": [
        {"ID": 3, "post_type": "forum", "post_title": "General"},
        {
            "ID": 10,
            "post_type": "topic",
            "post_author": 7,
            "post_parent": 3,
            "post_title": "Welcome thread",
            "post_content": "hi",
            "meta": {"_bbp_topic_id": 10, "_bbp_forum_id": 3},
        },
        {
            "ID": 55,
            "post_type": "reply",
            "post_author": 0,
            "post_parent": 10,
            "post_title": "Reply To: Welcome thread",
            "post_content": "<em>me too</em>",
            "meta": {
                "_bbp_topic_id": 10,
                "_bbp_forum_id": 3,
                "_bbp_reply_to": 42,
                "_bbp_anonymous_name": "Guest",
            },
        },
    ],
    "options": {"_bbp_thread_replies": True, "_bbp_thread_replies_depth": 3},
}


class PlainLocalizer:
    def translate(self, literal: str) -> str:
        return literal


def _site(tmp_path: Path) -> SQLiteSite:
    site = SQLiteSite(str(tmp_path / "site.db"))
    site.init_db()
    return site


def test_load_snapshot_and_lookups(tmp_path: Path) -> None:
    site = _site(tmp_path)
    assert site.load_snapshot(SNAPSHOT) == 3

    assert site.get_by_id(7) == SiteUser(id=7, display_name="Mara Quill")
    assert site.get_by_id(8) is None
    assert site.get_title(10) == "Welcome thread"
    assert site.get_title(999) == ""
    assert site.metadata.get(55, "_bbp_reply_to") == "42"
    assert site.metadata.get(55, "_bbp_missing") is None
    assert site.options.get("_bbp_thread_replies") == "1"
    assert site.options.get("missing", "fallback") == "fallback"


def test_init_db_is_idempotent(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.add_user(1, "First")
    site.init_db()
    assert site.get_by_id(1) == SiteUser(id=1, display_name="First")


def test_upserts_replace_values(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.set_option("_bbp_thread_replies", False)
    site.set_option("_bbp_thread_replies", True)
    site.set_meta(5, "_bbp_reply_to", 1)
    site.set_meta(5, "_bbp_reply_to", 2)
    site.add_user(1, "Old")
    site.add_user(1, "New")

    assert site.get_option("_bbp_thread_replies") == "1"
    assert site.get_meta(5, "_bbp_reply_to") == "2"
    assert site.get_by_id(1).display_name == "New"


def test_false_option_reads_back_as_disabled(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.set_option("_bbp_thread_replies", False)
    site.set_option("_bbp_thread_replies_depth", 4)

    assert load_threading_config(site.options) == ThreadingConfig(enabled=False, max_depth=4)


def test_get_post_builds_content_item(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.load_snapshot(SNAPSHOT)
    entity_types = EntityTypeMap()

    reply = site.get_post(55, entity_types)
    forum = site.get_post(3, entity_types)

    assert reply is not None and reply.kind is ContentKind.COMMENT
    assert reply.parent_id == 10
    assert reply.status == "publish"
    assert forum is not None and forum.kind is ContentKind.OTHER
    assert site.get_post(404, entity_types) is None


def test_site_backs_the_core_end_to_end(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.load_snapshot(SNAPSHOT)
    entity_types = EntityTypeMap()
    reply = site.get_post(55, entity_types)
    assert reply is not None and ContentClassifier().is_eligible(reply)

    extractor = MessageExtractor(
        users=site,
        metadata=site.metadata,
        titles=site,
        localizer=PlainLocalizer(),
    )
    payload = extractor.extract_message(reply)
    targets = TargetResolver(entity_types, site.metadata).resolve_targets(
        reply, load_threading_config(site.options)
    )

    assert payload.username == "Guest"
    assert payload.user_id == 0
    assert payload.content == "me too"
    assert payload.parent_post_title == "Welcome thread"
    assert payload.parent_section_title == "General"
    assert targets == [SubscriptionTarget("reply", 42)]


def test_null_snapshot_values_read_back_as_absent(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.load_snapshot(
        {
            "posts": [
                {
                    "ID": 60,
                    "post_type": "reply",
                    "post_author": 0,
                    "post_parent": 10,
                    "meta": {"_bbp_anonymous_name": None, "_bbp_reply_to": None},
                }
            ],
            "options": {"_bbp_thread_replies": None, "_bbp_thread_replies_depth": None},
        }
    )

    assert site.metadata.get(60, "_bbp_anonymous_name") is None
    assert site.options.get("_bbp_thread_replies", "default") == "default"
    assert load_threading_config(site.options) == ThreadingConfig(enabled=False, max_depth=2)

    reply = site.get_post(60, EntityTypeMap())
    assert reply is not None
    extractor = MessageExtractor(
        users=site,
        metadata=site.metadata,
        titles=site,
        localizer=PlainLocalizer(),
    )
    assert extractor.extract_message(reply).username == "Anonymous"


def test_setting_none_removes_existing_value(tmp_path: Path) -> None:
    site = _site(tmp_path)
    site.set_meta(5, "_bbp_reply_to", 42)
    site.set_option("_bbp_thread_replies", True)

    site.set_meta(5, "_bbp_reply_to", None)
    site.set_option("_bbp_thread_replies", None)

    assert site.get_meta(5, "_bbp_reply_to") is None
    assert site.get_option("_bbp_thread_replies") is None
