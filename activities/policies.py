# activities/policies.py
"""
Centralized Huddle Activity Policy Layer

Permission checks for activity actions are defined here.
Services use these methods instead of inline permission logic.
"""
from typing import Tuple

from .models import Activity


class ActivityPolicy:
    """
    Permission checks for activities and their participants.
    All methods return bool or (bool, str) with reason.
    """

    @staticmethod
    def is_creator(user, activity: Activity) -> bool:
        """Check if user created the activity."""
        if not user or activity is None:
            return False
        return activity.creator_id == getattr(user, "id", user)

    # ─────────────────────────────────────────────────────────────
    # Activity management
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def can_edit_activity(user, activity: Activity) -> Tuple[bool, str]:
        if ActivityPolicy.is_creator(user, activity):
            return True, ""
        return False, "Only the creator can update this activity"

    @staticmethod
    def can_delete_activity(user, activity: Activity) -> Tuple[bool, str]:
        if ActivityPolicy.is_creator(user, activity):
            return True, ""
        return False, "Only the creator can delete this activity"

    @staticmethod
    def can_complete_activity(user, activity: Activity) -> Tuple[bool, str]:
        if ActivityPolicy.is_creator(user, activity):
            return True, ""
        return False, "Only the creator can complete this activity"

    # ─────────────────────────────────────────────────────────────
    # Participation
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def can_request_to_join(user, activity: Activity) -> Tuple[bool, str]:
        """
        Check the activity-side rules for a join request.

        Duplicate and capacity checks happen in the participation manager,
        in that order, after this passes.
        """
        if activity.status != Activity.STATUS_OPEN:
            return False, "This activity is not open for joining"

        if ActivityPolicy.is_creator(user, activity):
            return False, "You are already the creator of this activity"

        return True, ""

    @staticmethod
    def check_age(user, activity: Activity) -> Tuple[bool, str]:
        """Age bounds apply only when the user's age is known."""
        age = getattr(user, "age", None)
        if age is None:
            return True, ""

        if activity.min_age is not None and age < activity.min_age:
            return False, "You do not meet the minimum age requirement"

        if activity.max_age is not None and age > activity.max_age:
            return False, "You exceed the maximum age limit"

        return True, ""

    @staticmethod
    def can_manage_requests(user, activity: Activity) -> Tuple[bool, str]:
        """Approve, reject and list pending requests."""
        if ActivityPolicy.is_creator(user, activity):
            return True, ""
        return False, "Only the activity creator can manage join requests"
