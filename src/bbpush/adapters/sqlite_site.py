"""SQLite site snapshot adapter.

Implements the UserDirectory, MetadataStore, OptionsStore, and TitleResolver
ports over a small WordPress-shaped SQLite database.
"""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from bbpush.adapters.event_mapper import build_content_item
from bbpush.core.config import EntityTypeMap
from bbpush.core.models import ContentItem


@dataclass(frozen=True)
class SiteUser:
    id: int
    display_name: str


def _encode(value: Any) -> str:
    # Scalars are stored as text like WordPress does; structures as JSON.
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class SQLiteSite:
    """Thin SQLite wrapper over users, posts, post meta, and options."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self.metadata = PostMetaStore(self)
        self.options = SiteOptionsStore(self)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - users: display names keyed by user id
        - posts: forums, topics, replies, and revisions
        - postmeta: per-post key/value pairs (bbPress ``_bbp_*`` keys)
        - options: site-wide settings such as reply threading
        """

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY,
                    display_name TEXT NOT NULL DEFAULT ''
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS posts (
                    id INTEGER PRIMARY KEY,
                    post_type TEXT NOT NULL,
                    post_author INTEGER NOT NULL DEFAULT 0,
                    post_title TEXT NOT NULL DEFAULT '',
                    post_content TEXT NOT NULL DEFAULT '',
                    post_status TEXT NOT NULL DEFAULT 'publish',
                    post_parent INTEGER NOT NULL DEFAULT 0,
                    post_name TEXT NOT NULL DEFAULT ''
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS postmeta (
                    post_id INTEGER NOT NULL,
                    meta_key TEXT NOT NULL,
                    meta_value TEXT,
                    PRIMARY KEY (post_id, meta_key)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS options (
                    option_name TEXT PRIMARY KEY,
                    option_value TEXT
                )
                """
            )

    def add_user(self, user_id: int, display_name: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO users (id, display_name) VALUES (?, ?)
                ON CONFLICT(id) DO UPDATE SET display_name = excluded.display_name
                """,
                (user_id, display_name),
            )

    def save_post(self, record: Mapping[str, Any]) -> None:
        """Upsert a ``wp_posts``-shaped record."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO posts (
                    id, post_type, post_author, post_title,
                    post_content, post_status, post_parent, post_name
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    post_type = excluded.post_type,
                    post_author = excluded.post_author,
                    post_title = excluded.post_title,
                    post_content = excluded.post_content,
                    post_status = excluded.post_status,
                    post_parent = excluded.post_parent,
                    post_name = excluded.post_name
                """,
                (
                    int(record.get("ID", record.get("id"))),
                    record["post_type"],
                    int(record.get("post_author", 0) or 0),
                    record.get("post_title", "") or "",
                    record.get("post_content", "") or "",
                    record.get("post_status", "publish") or "publish",
                    int(record.get("post_parent", 0) or 0),
                    record.get("post_name", "") or "",
                ),
            )

    def set_meta(self, post_id: int, key: str, value: Any) -> None:
        """Store a meta value; ``None`` removes the key so reads see it as absent."""

        with self._connect() as conn:
            if value is None:
                conn.execute(
                    "DELETE FROM postmeta WHERE post_id = ? AND meta_key = ?",
                    (post_id, key),
                )
                return
            conn.execute(
                """
                INSERT INTO postmeta (post_id, meta_key, meta_value) VALUES (?, ?, ?)
                ON CONFLICT(post_id, meta_key) DO UPDATE SET meta_value = excluded.meta_value
                """,
                (post_id, key, _encode(value)),
            )

    def set_option(self, name: str, value: Any) -> None:
        """Store an option; ``None`` removes it so the caller default applies."""

        with self._connect() as conn:
            if value is None:
                conn.execute("DELETE FROM options WHERE option_name = ?", (name,))
                return
            conn.execute(
                """
                INSERT INTO options (option_name, option_value) VALUES (?, ?)
                ON CONFLICT(option_name) DO UPDATE SET option_value = excluded.option_value
                """,
                (name, _encode(value)),
            )

    def load_snapshot(self, snapshot: Mapping[str, Any]) -> int:
        """Import a JSON site snapshot and return the number of posts loaded.

        Shape: ``{"users": [...], "posts": [{..., "meta": {...}}], "options": {...}}``.
        """

        for user in snapshot.get("users", []):
            self.add_user(int(user["id"]), user.get("display_name", ""))

        posts: Iterable[Mapping[str, Any]] = snapshot.get("posts", [])
        count = 0
        for post in posts:
            self.save_post(post)
            post_id = int(post.get("ID", post.get("id")))
            for key, value in (post.get("meta") or {}).items():
                self.set_meta(post_id, key, value)
            count += 1

        for name, value in (snapshot.get("options") or {}).items():
            self.set_option(name, value)
        return count

    def get_by_id(self, user_id: int) -> Optional[SiteUser]:
        """Return the user with ``user_id``, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, display_name FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if row is None:
            return None
        return SiteUser(id=int(row["id"]), display_name=row["display_name"])

    def get_title(self, content_id: int) -> str:
        """Return the post title, or an empty string for unknown ids."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT post_title FROM posts WHERE id = ?",
                (content_id,),
            ).fetchone()
        return row["post_title"] if row else ""

    def get_meta(self, post_id: int, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT meta_value FROM postmeta WHERE post_id = ? AND meta_key = ?",
                (post_id, key),
            ).fetchone()
        return row["meta_value"] if row else None

    def get_option(self, name: str, default: Any = None) -> Any:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT option_value FROM options WHERE option_name = ?",
                (name,),
            ).fetchone()
        return row["option_value"] if row else default

    def get_post(self, post_id: int, entity_types: EntityTypeMap) -> Optional[ContentItem]:
        """Load a post row as a core ContentItem."""

        with self._connect() as conn:
            row = conn.execute("SELECT * FROM posts WHERE id = ?", (post_id,)).fetchone()
        if row is None:
            return None
        return build_content_item(dict(row), entity_types)


class PostMetaStore:
    """MetadataStore view over ``SQLiteSite`` post meta."""

    def __init__(self, site: SQLiteSite) -> None:
        self._site = site

    def get(self, content_id: int, key: str) -> Optional[str]:
        return self._site.get_meta(content_id, key)


class SiteOptionsStore:
    """OptionsStore view over ``SQLiteSite`` options."""

    def __init__(self, site: SQLiteSite) -> None:
        self._site = site

    def get(self, key: str, default: Any = None) -> Any:
        return self._site.get_option(key, default)
