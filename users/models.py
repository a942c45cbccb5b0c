# users/models.py
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


SKILL_BEGINNER = "BEGINNER"
SKILL_INTERMEDIATE = "INTERMEDIATE"
SKILL_ADVANCED = "ADVANCED"

SKILL_LEVEL_CHOICES = [
    (SKILL_BEGINNER, "Beginner"),
    (SKILL_INTERMEDIATE, "Intermediate"),
    (SKILL_ADVANCED, "Advanced"),
]


class User(AbstractUser):
    full_name = models.CharField(max_length=255, blank=True, default="")
    age = models.PositiveSmallIntegerField(blank=True, null=True)
    profile_photo_url = models.CharField(max_length=1024, blank=True, null=True)

    @property
    def display_name(self):
        return self.full_name or self.username

    def __str__(self):
        return self.username


class UserProfile(models.Model):
    """
    Optional profile data used for matching and ranking.

    Rating and lifetime activity count are maintained by the system
    (feedback aggregation / activity completion), not edited by the user.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    bio = models.TextField(blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    skill_level = models.CharField(
        max_length=20,
        choices=SKILL_LEVEL_CHOICES,
        blank=True,
        null=True,
    )
    interests = models.TextField(blank=True, null=True, help_text="Comma-separated interests")

    average_rating = models.FloatField(default=0.0)
    total_activities = models.PositiveIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    INTEREST_DELIMITER = ","
    EXPERIENCED_THRESHOLD = 5

    def interest_tokens(self):
        if not self.interests:
            return set()
        return {
            token.strip()
            for token in self.interests.split(self.INTEREST_DELIMITER)
            if token.strip()
        }

    @property
    def experience_tag(self):
        return "Experienced" if self.total_activities >= self.EXPERIENCED_THRESHOLD else "Newbie"

    def __str__(self):
        return f"Profile({self.user.username})"
