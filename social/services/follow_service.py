"""Service implementing the follow-request state machine.

Edge lifecycle:
    no edge  -> pending   (follow a private profile)        REQUESTED
    no edge  -> accepted  (follow a public profile)         FOLLOWED
    rejected -> pending   (request again after a decline)   REQUESTED
    pending  -> accepted  (target accepts)                  ACCEPTED
    pending  -> rejected  (target declines)                 REJECTED
    any      -> no edge   (follower unfollows or cancels)   REMOVED

Each transition stores the edge first and then hands its FollowEvent to the
notification fan-out. Notification failures never undo the edge change.
"""

from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

import structlog

from social.auth.context import require_current_user
from social.constants import UNKNOWN_USER_NAME
from social.enums import (
    FollowAction,
    FollowEventKind,
    FollowStatus,
    NotificationType,
)
from social.exceptions import (
    DuplicateFollowError,
    FollowNotFoundError,
    InvalidActionError,
    ProfileAccessDeniedError,
    ProfileNotFoundError,
    SelfFollowError,
)
from social.models import Follow, Notification, Profile
from social.schemas.follow import (
    FollowEvent,
    FollowListItem,
    FollowListResponse,
    FollowStatsResponse,
)
from social.schemas.profile import ProfileSummary
from social.services.notification_fanout_service import notification_fanout_service
from social.services.privacy_service import privacy_service

logger = structlog.get_logger(__name__)


class FollowService:
    """Service for follow edges, scoped to the authenticated caller."""

    def follow(
        self, following_id: UUID, message: str | None = None
    ) -> tuple[Follow, FollowEvent]:
        """Follow a profile, or request to follow it if it is private.

        Args:
            following_id: Profile to follow.
            message: Optional note delivered with a follow request.

        Returns:
            The stored edge and the REQUESTED or FOLLOWED event.

        Raises:
            SelfFollowError: If the caller targets their own profile.
            ProfileNotFoundError: If the target profile does not exist.
            DuplicateFollowError: If a pending or accepted edge already exists.
        """
        current_user = require_current_user()
        follower_id = current_user.profile_id
        logger.info(
            "follow_requested",
            follower_id=str(follower_id),
            following_id=str(following_id),
        )

        if follower_id == following_id:
            raise SelfFollowError()

        target = Profile.objects.filter(id=following_id).first()
        if target is None:
            raise ProfileNotFoundError(following_id)
        if not Profile.objects.filter(id=follower_id).exists():
            raise ProfileNotFoundError(follower_id)

        new_status = (
            FollowStatus.PENDING.value
            if target.is_private
            else FollowStatus.ACCEPTED.value
        )

        try:
            with transaction.atomic():
                follow = (
                    Follow.objects.select_for_update()
                    .filter(follower_id=follower_id, following_id=following_id)
                    .first()
                )
                if follow is None:
                    follow = Follow.objects.create(
                        follower_id=follower_id,
                        following_id=following_id,
                        status=new_status,
                        message=message,
                    )
                elif follow.status == FollowStatus.REJECTED.value:
                    follow.status = new_status
                    follow.message = message
                    follow.save(update_fields=["status", "message", "updated_at"])
                    # The new request supersedes any earlier request notification
                    Notification.objects.filter(
                        related_follow_id=follow.id,
                        notification_type=NotificationType.FOLLOW_REQUEST.value,
                    ).delete()
                else:
                    raise DuplicateFollowError(follow.status)
        except IntegrityError as e:
            # Lost a race with a concurrent insert for the same pair
            existing_status = (
                Follow.objects.filter(
                    follower_id=follower_id, following_id=following_id
                )
                .values_list("status", flat=True)
                .first()
            )
            raise DuplicateFollowError(
                existing_status or FollowStatus.PENDING.value
            ) from e

        kind = (
            FollowEventKind.REQUESTED
            if follow.status == FollowStatus.PENDING.value
            else FollowEventKind.FOLLOWED
        )
        event = self._event(kind, follow)
        logger.info(
            "follow_edge_stored",
            follow_id=str(follow.id),
            status=follow.status,
        )

        self._emit(event)
        return follow, event

    def accept_request(self, follow_id: UUID) -> tuple[Follow, FollowEvent | None]:
        """Accept a pending follow request addressed to the caller.

        Accepting an already accepted request changes nothing and emits no
        event, so the follower is notified at most once.

        Raises:
            FollowNotFoundError: If the edge does not exist, is not addressed
                to the caller, or was rejected.
        """
        return self._resolve_request(
            follow_id, FollowStatus.ACCEPTED, FollowEventKind.ACCEPTED
        )

    def reject_request(self, follow_id: UUID) -> tuple[Follow, FollowEvent | None]:
        """Decline a pending follow request addressed to the caller.

        The edge is kept with status rejected. Rejecting twice is a no-op.

        Raises:
            FollowNotFoundError: If the edge does not exist, is not addressed
                to the caller, or was accepted.
        """
        return self._resolve_request(
            follow_id, FollowStatus.REJECTED, FollowEventKind.REJECTED
        )

    def respond_to_request(
        self, follow_id: UUID, action: FollowAction | str
    ) -> tuple[Follow, FollowEvent | None]:
        """Accept or reject a follow request."""
        action_value = action.value if isinstance(action, FollowAction) else action
        if action_value == FollowAction.ACCEPT.value:
            return self.accept_request(follow_id)
        if action_value == FollowAction.REJECT.value:
            return self.reject_request(follow_id)
        raise InvalidActionError(f"Unsupported follow action: {action_value}")

    def unfollow(self, following_id: UUID) -> FollowEvent:
        """Delete the caller's edge to a profile, whatever its status.

        This also cancels a pending request. No notification is sent; any
        follow_request notification left behind renders as unavailable.

        Raises:
            FollowNotFoundError: If the caller has no edge to the profile.
        """
        current_user = require_current_user()
        follower_id = current_user.profile_id

        follow = Follow.objects.filter(
            follower_id=follower_id, following_id=following_id
        ).first()
        if follow is None:
            raise FollowNotFoundError("You are not following this user")

        event = self._event(FollowEventKind.REMOVED, follow)
        follow.delete()
        logger.info(
            "follow_edge_removed",
            follow_id=str(event.follow_id),
            follower_id=str(follower_id),
            following_id=str(following_id),
        )

        self._emit(event)
        return event

    def list_followers(self, profile_id: UUID | None = None) -> FollowListResponse:
        """List accepted followers of a profile the caller may view."""
        target_id = self._target_profile_id(profile_id)
        privacy_service.ensure_can_view(target_id)

        edges = list(
            Follow.objects.filter(
                following_id=target_id, status=FollowStatus.ACCEPTED.value
            ).order_by("-created_at")
        )
        return self._list_response(
            "followers", target_id, edges, [edge.follower_id for edge in edges]
        )

    def list_following(self, profile_id: UUID | None = None) -> FollowListResponse:
        """List profiles a profile follows, if the caller may view it."""
        target_id = self._target_profile_id(profile_id)
        privacy_service.ensure_can_view(target_id)

        edges = list(
            Follow.objects.filter(
                follower_id=target_id, status=FollowStatus.ACCEPTED.value
            ).order_by("-created_at")
        )
        return self._list_response(
            "following", target_id, edges, [edge.following_id for edge in edges]
        )

    def list_requests(self, profile_id: UUID | None = None) -> FollowListResponse:
        """List pending requests addressed to the caller, newest first.

        Raises:
            ProfileAccessDeniedError: If profile_id names someone else.
        """
        current_user = require_current_user()
        if profile_id is not None and profile_id != current_user.profile_id:
            raise ProfileAccessDeniedError(
                "You can only view your own follow requests"
            )

        edges = list(
            Follow.objects.filter(
                following_id=current_user.profile_id,
                status=FollowStatus.PENDING.value,
            ).order_by("-created_at")
        )
        return self._list_response(
            "requests",
            current_user.profile_id,
            edges,
            [edge.follower_id for edge in edges],
        )

    def get_follow_stats(self, profile_id: UUID | None = None) -> FollowStatsResponse:
        """Count a profile's followers and report the caller's edge to it."""
        current_user = require_current_user()
        target_id = self._target_profile_id(profile_id)
        is_own_profile = target_id == current_user.profile_id

        if not Profile.objects.filter(id=target_id).exists():
            raise ProfileNotFoundError(target_id)

        accepted = Follow.objects.filter(status=FollowStatus.ACCEPTED.value)
        followers_count = accepted.filter(following_id=target_id).count()
        following_count = accepted.filter(follower_id=target_id).count()

        pending_requests_count = None
        follow_status = None
        if is_own_profile:
            pending_requests_count = Follow.objects.filter(
                following_id=target_id, status=FollowStatus.PENDING.value
            ).count()
        else:
            follow_status = (
                Follow.objects.filter(
                    follower_id=current_user.profile_id, following_id=target_id
                )
                .values_list("status", flat=True)
                .first()
            )

        return FollowStatsResponse(
            profile_id=target_id,
            followers_count=followers_count,
            following_count=following_count,
            pending_requests_count=pending_requests_count,
            follow_status=follow_status,
            is_following=follow_status == FollowStatus.ACCEPTED.value,
            is_pending=follow_status == FollowStatus.PENDING.value,
            is_own_profile=is_own_profile,
        )

    def _resolve_request(
        self,
        follow_id: UUID,
        new_status: FollowStatus,
        kind: FollowEventKind,
    ) -> tuple[Follow, FollowEvent | None]:
        """Move a pending edge addressed to the caller to new_status.

        The update is conditional on the edge still being pending, so of two
        concurrent calls only the one that changed the row emits an event.
        """
        current_user = require_current_user()
        logger.info(
            "follow_request_resolution",
            follow_id=str(follow_id),
            resolution=new_status.value,
            user_id=str(current_user.user_id),
        )

        updated = Follow.objects.filter(
            id=follow_id,
            following_id=current_user.profile_id,
            status=FollowStatus.PENDING.value,
        ).update(status=new_status.value, updated_at=timezone.now())

        follow = Follow.objects.filter(
            id=follow_id, following_id=current_user.profile_id
        ).first()
        if follow is None:
            logger.warning("follow_request_not_found", follow_id=str(follow_id))
            raise FollowNotFoundError()

        if not updated:
            if follow.status == new_status.value:
                logger.info(
                    "follow_request_already_resolved",
                    follow_id=str(follow_id),
                    status=follow.status,
                )
                return follow, None
            raise FollowNotFoundError(
                f"Follow request has already been {follow.status}"
            )

        event = self._event(kind, follow)
        self._emit(event)
        return follow, event

    def _emit(self, event: FollowEvent) -> None:
        """Hand an event to the notification fan-out, never raising."""
        try:
            notification_fanout_service.dispatch_follow_event(event)
        except Exception as e:
            logger.error(
                "follow_event_dispatch_failed",
                kind=event.kind.value,
                follow_id=str(event.follow_id),
                error=str(e),
            )

    def _event(self, kind: FollowEventKind, follow: Follow) -> FollowEvent:
        return FollowEvent(
            kind=kind,
            follow_id=follow.id,
            follower_id=follow.follower_id,
            following_id=follow.following_id,
            message=follow.message,
        )

    def _target_profile_id(self, profile_id: UUID | None) -> UUID:
        if profile_id is not None:
            return profile_id
        return require_current_user().profile_id

    def _list_response(
        self,
        list_type: str,
        profile_id: UUID,
        edges: list[Follow],
        other_ids: list[UUID],
    ) -> FollowListResponse:
        """Build a list response, resolving the other participant of each edge."""
        profiles = Profile.objects.in_bulk(other_ids)
        items = [
            FollowListItem(
                id=edge.id,
                status=edge.status,
                message=edge.message,
                created_at=edge.created_at,
                profile=self._summarize(other_id, profiles.get(other_id)),
            )
            for edge, other_id in zip(edges, other_ids, strict=True)
        ]
        return FollowListResponse(
            type=list_type,
            profile_id=profile_id,
            count=len(items),
            items=items,
        )

    def _summarize(self, profile_id: UUID, profile: Profile | None) -> ProfileSummary:
        if profile is None:
            return ProfileSummary(id=profile_id, name=UNKNOWN_USER_NAME)
        return ProfileSummary.model_validate(profile)


follow_service = FollowService()
