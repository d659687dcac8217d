"""Follow graph enumerations.

This module contains the follow edge status values, the transitions a
follow edge can go through and the actions a target may take on a
pending request.
"""

from enum import Enum


class FollowStatus(str, Enum):
    """Approval status of a follow edge."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FollowEventKind(str, Enum):
    """Transition that produced a follow event.

    REQUESTED: a pending edge was created (private target) or a rejected
        edge was re-requested.
    FOLLOWED: an accepted edge was created directly (public target).
    ACCEPTED: a pending edge moved to accepted.
    REJECTED: a pending edge moved to rejected.
    REMOVED: the edge was deleted by its follower.
    """

    REQUESTED = "requested"
    FOLLOWED = "followed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    REMOVED = "removed"


class FollowAction(str, Enum):
    """Actions the target of a follow request can take."""

    ACCEPT = "accept"
    REJECT = "reject"
