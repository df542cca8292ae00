"""bbPress metadata and option keys read by the core."""

META_ANONYMOUS_NAME = "_bbp_anonymous_name"
META_TOPIC_ID = "_bbp_topic_id"
META_FORUM_ID = "_bbp_forum_id"
META_REPLY_TO = "_bbp_reply_to"

OPTION_THREAD_REPLIES = "_bbp_thread_replies"
OPTION_THREAD_REPLIES_DEPTH = "_bbp_thread_replies_depth"

# bbPress ships with threading off and a depth of 2.
DEFAULT_THREAD_REPLIES = False
DEFAULT_THREAD_REPLIES_DEPTH = 2

ORIGIN_REST = "rest"
