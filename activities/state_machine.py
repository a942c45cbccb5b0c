# activities/state_machine.py
"""
Activity State Machine for Huddle.

Enforces valid state transitions for the activity lifecycle:
OPEN ⇄ FULL (automatic, driven by capacity)
OPEN | FULL → COMPLETED (creator)
OPEN | FULL → CANCELLED (creator soft delete)

COMPLETED and CANCELLED are terminal. Any transition not in
VALID_TRANSITIONS is rejected.
"""
from typing import Tuple
import logging

from django.db import transaction

from core.exceptions import BadRequest
from users.services import ProfileService
from .models import Activity, Participant
from .policies import ActivityPolicy
from .selectors import get_activity

logger = logging.getLogger('huddle.activities')


# Valid state transitions: from_status -> list of allowed to_statuses
VALID_TRANSITIONS = {
    Activity.STATUS_OPEN: [Activity.STATUS_FULL, Activity.STATUS_COMPLETED, Activity.STATUS_CANCELLED],
    Activity.STATUS_FULL: [Activity.STATUS_OPEN, Activity.STATUS_COMPLETED, Activity.STATUS_CANCELLED],
    Activity.STATUS_COMPLETED: [],
    Activity.STATUS_CANCELLED: [],
}


def can_transition(activity: Activity, new_status: str) -> Tuple[bool, str]:
    """
    Check if an activity can transition to a new status.

    Returns (can_transition: bool, reason: str)
    """
    current_status = activity.status

    if new_status == current_status:
        return True, "Same status"

    if new_status not in dict(Activity.STATUS_CHOICES):
        return False, f"Invalid status: {new_status}"

    allowed = VALID_TRANSITIONS.get(current_status, [])

    if new_status not in allowed:
        return False, f"Cannot transition from '{current_status}' to '{new_status}'"

    return True, ""


def transition(activity: Activity, new_status: str, actor=None, save: bool = True) -> Tuple[bool, str]:
    """
    Attempt to transition an activity to a new status.

    Args:
        activity: The activity to transition
        new_status: The target status
        actor: The user performing the action (for logging)
        save: Whether to save the activity after transitioning

    Returns (success: bool, message: str)
    """
    can, reason = can_transition(activity, new_status)

    if not can:
        logger.warning(
            f"Invalid state transition attempted: activity={activity.id}, "
            f"from={activity.status}, to={new_status}, actor={getattr(actor, 'id', 'system')}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_status = activity.status
    activity.status = new_status

    if save:
        activity.save(update_fields=['status', 'updated_at'])

    logger.info(
        f"Activity state transition: activity={activity.id}, "
        f"from={old_status}, to={new_status}, actor={getattr(actor, 'id', 'system')}"
    )

    return True, f"Transitioned from '{old_status}' to '{new_status}'"


def is_terminal_status(status: str) -> bool:
    """
    Check if a status is a terminal state (no further transitions).
    """
    return status not in VALID_TRANSITIONS or len(VALID_TRANSITIONS[status]) == 0


def sync_capacity_status(activity: Activity, actor=None, save: bool = True) -> bool:
    """
    Recompute OPEN/FULL from the capacity fields.

    Terminal activities are left alone. Returns True if the status changed.
    """
    if is_terminal_status(activity.status):
        return False

    target = Activity.STATUS_FULL if activity.is_at_capacity else Activity.STATUS_OPEN
    if target == activity.status:
        return False

    ok, _ = transition(activity, target, actor=actor, save=save)
    return ok


def complete_activity(activity_id, actor) -> Activity:
    """
    Mark an activity as completed and credit everyone who took part.

    The creator and every APPROVED participant get one more lifetime
    activity. Only OPEN or FULL activities can be completed, so the
    credit is applied exactly once.
    """
    with transaction.atomic():
        activity = get_activity(activity_id, for_update=True)

        allowed, reason = ActivityPolicy.can_complete_activity(actor, activity)
        if not allowed:
            raise BadRequest(reason)

        if is_terminal_status(activity.status):
            raise BadRequest(f"This activity is already {activity.get_status_display().lower()}")

        ok, message = transition(activity, Activity.STATUS_COMPLETED, actor=actor)
        if not ok:
            raise BadRequest(message)

        participant_ids = list(
            Participant.objects.filter(
                activity=activity,
                status=Participant.STATUS_APPROVED,
            ).values_list('user_id', flat=True)
        )
        for user_id in [activity.creator_id, *participant_ids]:
            ProfileService.increment_activity_count(user_id)

    logger.info(
        f"Activity completed: activity={activity.id}, credited={1 + len(participant_ids)}"
    )
    return activity


def delete_activity(activity_id, actor) -> Activity:
    """
    Soft delete an activity.

    OPEN and FULL activities become CANCELLED; completed activities keep
    their status. Participant rows are left untouched.
    """
    with transaction.atomic():
        activity = get_activity(activity_id, for_update=True)

        allowed, reason = ActivityPolicy.can_delete_activity(actor, activity)
        if not allowed:
            raise BadRequest(reason)

        if not is_terminal_status(activity.status):
            transition(activity, Activity.STATUS_CANCELLED, actor=actor, save=False)

        activity.deleted = True
        activity.save(update_fields=['status', 'deleted', 'updated_at'])

    logger.info(f"Activity deleted: activity={activity.id}, status={activity.status}, actor={actor.id}")
    return activity
