# activities/selectors.py
"""Row lookups shared by the activity services."""
from core.exceptions import NotFound
from .models import Activity, Participant


def get_activity(activity_id, for_update: bool = False) -> Activity:
    """
    Fetch a live (not soft-deleted) activity or raise NotFound.

    With for_update=True the row is locked until the surrounding
    transaction ends; callers must be inside transaction.atomic().
    """
    qs = Activity.objects.select_related("creator", "creator__profile")
    if for_update:
        qs = Activity.objects.select_for_update()

    try:
        return qs.get(pk=activity_id, deleted=False)
    except (Activity.DoesNotExist, ValueError, TypeError):
        raise NotFound.for_resource("Activity", "id", activity_id)


def get_participant(participant_id, activity_id=None) -> Participant:
    """Fetch a participant, optionally scoped to the activity in the URL."""
    qs = Participant.objects.select_related("activity", "user", "user__profile")
    if activity_id is not None:
        qs = qs.filter(activity_id=activity_id)

    try:
        return qs.get(pk=participant_id)
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise NotFound.for_resource("Participant", "id", participant_id)
