# activities/participation.py
"""
Join requests and their approval workflow.

Capacity is guarded twice on approval: the activity row is locked with
select_for_update, and the counter is bumped with a conditional UPDATE
that only matches while a slot is free. Backends without row locks
(SQLite) still cannot overbook.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import F, Q

from core.exceptions import BadRequest, Conflict, NotFound
from . import datetime_utils
from .models import Activity, Participant
from .policies import ActivityPolicy
from .selectors import get_activity, get_participant
from .state_machine import is_terminal_status, sync_capacity_status

logger = logging.getLogger("huddle.activities")

DUPLICATE_REQUEST = "You have already requested to join this activity"
ALREADY_PROCESSED = "This request has already been processed"


class ParticipationManager:
    """
    Participation lifecycle: PENDING -> APPROVED | REJECTED.

    The activity creator is an implicit approved participant and has no
    Participant row; `current_participants` counts them as the first slot.
    """

    @staticmethod
    def request_to_join(activity_id, requester) -> Participant:
        activity = get_activity(activity_id)

        allowed, reason = ActivityPolicy.can_request_to_join(requester, activity)
        if not allowed:
            raise BadRequest(reason)

        if Participant.objects.filter(activity=activity, user=requester).exists():
            raise BadRequest(DUPLICATE_REQUEST)

        allowed, reason = ActivityPolicy.check_age(requester, activity)
        if not allowed:
            raise BadRequest(reason)

        if activity.is_at_capacity:
            logger.warning(
                f"Join refused, activity full: activity={activity.id}, user={requester.id}, "
                f"current={activity.current_participants}, max={activity.max_participants}"
            )
            raise BadRequest("This activity has reached maximum capacity")

        try:
            # Savepoint so the unique constraint violation does not poison an outer transaction
            with transaction.atomic():
                participant = Participant.objects.create(
                    activity=activity,
                    user=requester,
                    status=Participant.STATUS_PENDING,
                )
        except IntegrityError:
            raise BadRequest(DUPLICATE_REQUEST)

        logger.info(f"Join requested: activity={activity.id}, user={requester.id}, participant={participant.id}")
        return participant

    @staticmethod
    def approve(participant_id, actor, activity_id=None) -> Participant:
        participant = get_participant(participant_id, activity_id)

        with transaction.atomic():
            # Per-activity serialization point
            activity = Activity.objects.select_for_update().get(pk=participant.activity_id)

            allowed, reason = ActivityPolicy.can_manage_requests(actor, activity)
            if not allowed:
                raise BadRequest(reason)

            participant.refresh_from_db(fields=["status", "responded_at"])
            if participant.status != Participant.STATUS_PENDING:
                raise Conflict(ALREADY_PROCESSED)

            if activity.deleted or is_terminal_status(activity.status):
                raise BadRequest("This activity is no longer accepting participants")

            if activity.is_at_capacity:
                logger.warning(
                    f"Approval refused, activity full: activity={activity.id}, participant={participant.id}"
                )
                raise BadRequest("Activity has reached maximum capacity")

            responded_at = datetime_utils.now()
            claimed = Participant.objects.filter(
                pk=participant.pk,
                status=Participant.STATUS_PENDING,
            ).update(status=Participant.STATUS_APPROVED, responded_at=responded_at)
            if not claimed:
                raise Conflict(ALREADY_PROCESSED)

            incremented = (
                Activity.objects
                .filter(pk=activity.pk)
                .filter(Q(max_participants__isnull=True) | Q(current_participants__lt=F("max_participants")))
                .update(current_participants=F("current_participants") + 1, updated_at=responded_at)
            )
            if not incremented:
                # Raising rolls back the participant update above
                logger.warning(
                    f"Approval lost capacity race: activity={activity.id}, participant={participant.id}"
                )
                raise BadRequest("Activity has reached maximum capacity")

            activity.refresh_from_db(fields=["current_participants", "max_participants", "status"])
            sync_capacity_status(activity, actor=actor)

        participant.status = Participant.STATUS_APPROVED
        participant.responded_at = responded_at
        participant.activity = activity

        logger.info(
            f"Join approved: activity={activity.id}, participant={participant.id}, "
            f"user={participant.user_id}, count={activity.current_participants}"
        )
        return participant

    @staticmethod
    def reject(participant_id, actor, activity_id=None) -> Participant:
        participant = get_participant(participant_id, activity_id)

        allowed, reason = ActivityPolicy.can_manage_requests(actor, participant.activity)
        if not allowed:
            raise BadRequest(reason)

        responded_at = datetime_utils.now()
        updated = Participant.objects.filter(
            pk=participant.pk,
            status=Participant.STATUS_PENDING,
        ).update(status=Participant.STATUS_REJECTED, responded_at=responded_at)
        if not updated:
            raise Conflict(ALREADY_PROCESSED)

        participant.status = Participant.STATUS_REJECTED
        participant.responded_at = responded_at

        logger.info(
            f"Join rejected: activity={participant.activity_id}, participant={participant.id}, "
            f"user={participant.user_id}"
        )
        return participant

    @staticmethod
    def is_approved_participant(activity_id, user_id) -> bool:
        """Authorization gate for chat and feedback: creator or APPROVED participant."""
        if Activity.objects.filter(pk=activity_id, creator_id=user_id).exists():
            return True
        return Participant.objects.filter(
            activity_id=activity_id,
            user_id=user_id,
            status=Participant.STATUS_APPROVED,
        ).exists()

    @staticmethod
    def get_pending_requests(activity_id, actor):
        activity = get_activity(activity_id)

        allowed, reason = ActivityPolicy.can_manage_requests(actor, activity)
        if not allowed:
            raise BadRequest(reason)

        return (
            Participant.objects
            .filter(activity=activity, status=Participant.STATUS_PENDING)
            .select_related("user", "user__profile")
            .order_by("requested_at", "id")
        )

    @staticmethod
    def get_approved_participants(activity_id):
        # Rows of soft-deleted activities stay readable
        if not Activity.objects.filter(pk=activity_id).exists():
            raise NotFound.for_resource("Activity", "id", activity_id)

        return (
            Participant.objects
            .filter(activity_id=activity_id, status=Participant.STATUS_APPROVED)
            .select_related("user", "user__profile")
            .order_by("responded_at", "id")
        )

    @staticmethod
    def get_my_participation(activity_id, user):
        """The caller's Participant row, or None when they never asked to join."""
        return (
            Participant.objects
            .filter(activity_id=activity_id, user=user)
            .select_related("user", "user__profile")
            .first()
        )
