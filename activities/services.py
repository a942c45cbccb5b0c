# activities/services.py
import logging

from django.conf import settings
from django.db import transaction

from core.exceptions import BadRequest
from .models import Activity, Participant
from .policies import ActivityPolicy
from .selectors import get_activity
from .state_machine import sync_capacity_status

logger = logging.getLogger("huddle.activities")

EDITABLE_FIELDS = (
    "name",
    "category",
    "description",
    "location",
    "scheduled_at",
    "required_skill_level",
    "min_age",
    "max_age",
    "max_participants",
    "entry_fee",
    "image_urls",
)

ALLOWED_ORDERING = {
    "created_at", "-created_at",
    "scheduled_at", "-scheduled_at",
    "name", "-name",
}


def get_predefined_categories():
    return list(settings.ACTIVITY_CATEGORIES)


def create_activity(creator, **fields) -> Activity:
    """The creator takes the first slot; new activities are always OPEN."""
    data = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
    activity = Activity.objects.create(
        creator=creator,
        current_participants=1,
        status=Activity.STATUS_OPEN,
        **data,
    )
    logger.info(f"Activity created: activity={activity.id}, creator={creator.id}, category={activity.category}")
    return activity


def update_activity(activity_id, actor, **fields) -> Activity:
    """
    Partial update by the creator. Fields passed as None are left unchanged.

    Lowering max_participants below the current head count is refused;
    any capacity change re-derives OPEN/FULL.
    """
    with transaction.atomic():
        activity = get_activity(activity_id, for_update=True)

        allowed, reason = ActivityPolicy.can_edit_activity(actor, activity)
        if not allowed:
            raise BadRequest(reason)

        changes = {
            key: value for key, value in fields.items()
            if key in EDITABLE_FIELDS and value is not None
        }

        new_max = changes.get("max_participants")
        if new_max is not None and new_max < activity.current_participants:
            raise BadRequest(
                f"Max participants cannot be lower than the current participant count "
                f"({activity.current_participants})"
            )

        min_age = changes.get("min_age", activity.min_age)
        max_age = changes.get("max_age", activity.max_age)
        if min_age is not None and max_age is not None and min_age > max_age:
            raise BadRequest("Minimum age cannot be greater than maximum age")

        for attr, value in changes.items():
            setattr(activity, attr, value)
        activity.save()

        if "max_participants" in changes:
            sync_capacity_status(activity, actor=actor)

    logger.info(f"Activity updated: activity={activity.id}, fields={sorted(changes)}")
    return get_activity(activity.id)


def filter_activities(category=None, skill_level=None, location=None, status=None, ordering=None):
    qs = Activity.objects.filter(deleted=False).select_related("creator", "creator__profile")

    if category:
        qs = qs.filter(category=category)
    if skill_level:
        qs = qs.filter(required_skill_level=skill_level)
    if location:
        qs = qs.filter(location__icontains=location)
    if status:
        qs = qs.filter(status=status)

    if ordering in ALLOWED_ORDERING:
        return qs.order_by(ordering, "-id")
    return qs.order_by("-created_at", "-id")


def my_created_activities(user):
    return (
        Activity.objects
        .filter(creator=user, deleted=False)
        .select_related("creator", "creator__profile")
        .order_by("-created_at", "-id")
    )


def my_joined_activities(user):
    """Live activities the user was approved for."""
    return (
        Activity.objects
        .filter(
            deleted=False,
            participants__user=user,
            participants__status=Participant.STATUS_APPROVED,
        )
        .select_related("creator", "creator__profile")
        .order_by("-created_at", "-id")
    )
