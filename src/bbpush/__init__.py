"""bbpush: push notification source for bbPress forums.

Decides which newly published topics and replies deserve a push
notification, what the payload looks like, and which forum, topic, or reply
subscribers should receive it.
"""

__version__ = "0.1.0"
