"""Event type constants.

Learn: Centralizing event types as constants prevents typos and
makes it easy to discover every event the live channel can carry.
Clients receive them as {"type": <constant>, ...}.
"""

# ─── Posts ───────────────────────────────────────────────

POST_CREATED = "post.created"
POST_UPDATED = "post.updated"
POST_DELETED = "post.deleted"
POST_REACTED = "post.reacted"

# ─── Comments / messages ─────────────────────────────────

COMMENT_ADDED = "comment.added"
MESSAGE_SENT = "message.sent"

# ─── Graph ───────────────────────────────────────────────

USER_FOLLOWED = "user.followed"

# ─── Live channel housekeeping ───────────────────────────

WELCOME = "welcome"
