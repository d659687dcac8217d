"""Follow event emitted by follow-graph transitions."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from social.enums import FollowEventKind


class FollowEvent(BaseModel):
    """A follow edge transition, consumed by the notification fan-out.

    Events are produced only by transitions that actually changed the edge;
    a repeated accept or reject produces no event.
    """

    model_config = ConfigDict(frozen=True)

    kind: FollowEventKind
    follow_id: UUID
    follower_id: UUID
    following_id: UUID
    message: str | None = None
