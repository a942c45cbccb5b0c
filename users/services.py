import logging

from django.db import transaction
from django.db.models import F

from core.exceptions import NotFound
from .models import User, UserProfile

logger = logging.getLogger("huddle.users")


class ProfileService:
    """
    Profile provider used by the activities app.

    Reads profile data for matching and owns the lifetime activity
    counter bumped when an activity is completed.
    """

    @staticmethod
    def get_user(user_id):
        try:
            return User.objects.select_related("profile").get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound.for_resource("User", "id", user_id)

    @staticmethod
    def get_profile(user):
        """Return the user's profile, or None when it was never created."""
        try:
            return user.profile
        except UserProfile.DoesNotExist:
            return None

    @staticmethod
    def get_rating(user) -> float:
        profile = ProfileService.get_profile(user)
        return profile.average_rating if profile else 0.0

    @staticmethod
    @transaction.atomic
    def create_or_update_profile(user, **fields):
        profile, created = UserProfile.objects.select_for_update().get_or_create(user=user)

        for attr, value in fields.items():
            if value is not None:
                setattr(profile, attr, value)
        profile.save()

        logger.info(f"Profile {'created' if created else 'updated'}: user={user.id}, fields={sorted(fields)}")
        return profile

    @staticmethod
    def increment_activity_count(user_id):
        """
        Add one completed activity to the user's lifetime count.

        Users without a profile are skipped; unknown users raise NotFound.
        """
        if not User.objects.filter(pk=user_id).exists():
            raise NotFound.for_resource("User", "id", user_id)

        updated = UserProfile.objects.filter(user_id=user_id).update(
            total_activities=F("total_activities") + 1
        )
        if not updated:
            logger.info(f"Activity count not incremented, no profile: user={user_id}")
        return bool(updated)

