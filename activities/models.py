# activities/models.py
from django.conf import settings
from django.db import models

from users.models import SKILL_LEVEL_CHOICES


class Activity(models.Model):
    STATUS_OPEN = "OPEN"
    STATUS_FULL = "FULL"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_OPEN, "Open"),
        (STATUS_FULL, "Full"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_activities",
    )
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    scheduled_at = models.DateTimeField(blank=True, null=True)
    required_skill_level = models.CharField(
        max_length=20,
        choices=SKILL_LEVEL_CHOICES,
        blank=True,
        null=True,
    )

    min_age = models.PositiveSmallIntegerField(blank=True, null=True)
    max_age = models.PositiveSmallIntegerField(blank=True, null=True)

    # NULL means unlimited
    max_participants = models.PositiveIntegerField(blank=True, null=True)
    # The creator occupies the first slot
    current_participants = models.PositiveIntegerField(default=1)

    entry_fee = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    # List of image URL strings
    image_urls = models.JSONField(default=list, blank=True)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_OPEN)
    deleted = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(max_participants__isnull=True)
                | models.Q(current_participants__lte=models.F("max_participants")),
                name="activity_capacity_not_exceeded",
            ),
        ]
        indexes = [
            models.Index(
                fields=["status", "deleted", "created_at"],
                name="activity_status_created_idx",
            ),
            models.Index(
                fields=["creator", "deleted"],
                name="activity_creator_idx",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def has_capacity_limit(self):
        return self.max_participants is not None

    @property
    def is_at_capacity(self):
        return self.has_capacity_limit and self.current_participants >= self.max_participants

    @property
    def spots_left(self):
        if not self.has_capacity_limit:
            return None
        return max(0, self.max_participants - self.current_participants)


class Participant(models.Model):
    STATUS_PENDING = "PENDING"
    STATUS_APPROVED = "APPROVED"
    STATUS_REJECTED = "REJECTED"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    activity = models.ForeignKey(
        Activity,
        on_delete=models.CASCADE,
        related_name="participants",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="participations",
    )
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)

    requested_at = models.DateTimeField(auto_now_add=True)
    responded_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        constraints = [
            # One request per user per activity, enforced by the database
            models.UniqueConstraint(
                fields=["activity", "user"],
                name="participant_unique_activity_user",
            ),
        ]
        indexes = [
            models.Index(
                fields=["activity", "status", "requested_at"],
                name="part_activity_status_idx",
            ),
            models.Index(
                fields=["user", "status"],
                name="part_user_status_idx",
            ),
        ]

    def __str__(self):
        return f"{self.user} -> {self.activity} ({self.status})"
