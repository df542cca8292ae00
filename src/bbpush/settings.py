"""Static configuration for bbpush.

All user-editable settings (entity types, notifications, logging) live in a
single JSON file for quick edits without touching Python.
"""

import json
import os
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

load_dotenv()


def find_config_path(override: Optional[str], project_root: str, cwd: str) -> str:
    """Pick BBPUSH_CONFIG, then the checkout's config.json, then the working directory's."""

    if override:
        return override
    checkout_config = os.path.join(project_root, "config.json")
    if os.path.exists(checkout_config):
        return checkout_config
    # Installed copies have no checkout root next to the package.
    return os.path.join(cwd, "config.json")


CONFIG_PATH = find_config_path(os.getenv("BBPUSH_CONFIG"), PROJECT_ROOT, os.getcwd())
CONFIG_DIR = os.path.dirname(os.path.abspath(CONFIG_PATH))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(CONFIG_DIR, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# SQLite snapshot of users, posts, post meta, and options.
DB_PATH = _resolve_path(_CONFIG.get("db_path", "bbpush.db"))

# Concrete post types behind the section/post/comment roles.
_entity_types = _CONFIG.get("entity_types", {})
ENTITY_SECTION = _entity_types.get("section", "forum")
ENTITY_POST = _entity_types.get("post", "topic")
ENTITY_COMMENT = _entity_types.get("comment", "reply")

# Push body length and where resolved notifications are handed off.
# - DELIVERY_METHOD: "log" or "stdout"
_notifications = _CONFIG.get("notifications", {})
SNIPPET_CHARS = int(_notifications.get("snippet_chars", 400))
DELIVERY_METHOD = _notifications.get("delivery_method", "log")

# gettext catalogs for the "bb-app" text domain (optional).
_localization = _CONFIG.get("localization", {})
LOCALE_DIR = _localization.get("locale_dir")
if LOCALE_DIR:
    LOCALE_DIR = _resolve_path(LOCALE_DIR)
LANGUAGES = _localization.get("languages") or None

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
