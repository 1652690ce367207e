"""Labels and keys of the member graph."""
from __future__ import annotations

MEMBER = "member"
USERNAME = "username"

FRIENDSHIP = "friendship"
PENDING_FRIENDSHIP = "pendingFriendship"
