from rest_framework import serializers

from users.models import SKILL_LEVEL_CHOICES
from users.services import ProfileService
from . import datetime_utils
from .models import Activity, Participant
from .sanitizers import (
    sanitize_title,
    sanitize_description,
    validate_age,
    validate_age_range,
    validate_capacity,
    validate_entry_fee,
    validate_image_urls,
    ValidationError as SanitizationError,
)


# -----------------------------------------
# ACTIVITY (read view)
# -----------------------------------------
class ActivitySerializer(serializers.ModelSerializer):
    creator_id = serializers.IntegerField(source="creator.id", read_only=True)
    creator_name = serializers.CharField(source="creator.display_name", read_only=True)
    creator_photo_url = serializers.CharField(source="creator.profile_photo_url", read_only=True)
    creator_rating = serializers.SerializerMethodField()
    spots_left = serializers.IntegerField(read_only=True)

    class Meta:
        model = Activity
        fields = [
            "id",
            "name",
            "category",
            "description",
            "location",
            "scheduled_at",
            "required_skill_level",
            "min_age",
            "max_age",
            "max_participants",
            "current_participants",
            "spots_left",
            "entry_fee",
            "image_urls",
            "status",
            "created_at",
            "updated_at",
            "creator_id",
            "creator_name",
            "creator_photo_url",
            "creator_rating",
        ]
        read_only_fields = fields

    def get_creator_rating(self, obj):
        return ProfileService.get_rating(obj.creator)


# -----------------------------------------
# ACTIVITY (create / update input)
# -----------------------------------------
class ActivityWriteSerializer(serializers.Serializer):
    """
    Input for creating and editing activities.

    Used with partial=True for PATCH/PUT edits, where only the supplied
    fields are applied.
    """
    name = serializers.CharField(max_length=255)
    category = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(max_length=255)
    scheduled_at = serializers.DateTimeField(required=False, allow_null=True)
    required_skill_level = serializers.ChoiceField(
        choices=SKILL_LEVEL_CHOICES, required=False, allow_null=True
    )
    min_age = serializers.IntegerField(required=False, allow_null=True)
    max_age = serializers.IntegerField(required=False, allow_null=True)
    max_participants = serializers.IntegerField(required=False, allow_null=True)
    entry_fee = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    image_urls = serializers.ListField(
        child=serializers.CharField(max_length=2048), required=False, allow_empty=True
    )

    def validate_name(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Activity name is required")
        return value

    def validate_category(self, value):
        value = sanitize_title(value, max_length=100)
        if not value:
            raise serializers.ValidationError("Category is required")
        return value

    def validate_location(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Location is required")
        return value

    def validate_description(self, value):
        """Sanitize description (allows limited HTML)."""
        return sanitize_description(value)

    def validate_scheduled_at(self, value):
        if value is not None and value <= datetime_utils.now():
            raise serializers.ValidationError("Activity date must be in the future")
        return value

    def validate_min_age(self, value):
        try:
            return validate_age(value, "Minimum age")
        except SanitizationError as e:
            raise serializers.ValidationError(str(e))

    def validate_max_age(self, value):
        try:
            return validate_age(value, "Maximum age")
        except SanitizationError as e:
            raise serializers.ValidationError(str(e))

    def validate_max_participants(self, value):
        try:
            return validate_capacity(value)
        except SanitizationError as e:
            raise serializers.ValidationError(str(e))

    def validate_entry_fee(self, value):
        try:
            return validate_entry_fee(value)
        except SanitizationError as e:
            raise serializers.ValidationError(str(e))

    def validate_image_urls(self, value):
        try:
            return validate_image_urls(value)
        except SanitizationError as e:
            raise serializers.ValidationError(str(e))

    def validate(self, attrs):
        try:
            validate_age_range(attrs.get("min_age"), attrs.get("max_age"))
        except SanitizationError as e:
            raise serializers.ValidationError({"max_age": str(e)})
        return attrs


# -----------------------------------------
# PARTICIPANT
# -----------------------------------------
class ParticipantSerializer(serializers.ModelSerializer):
    activity_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_name = serializers.CharField(source="user.display_name", read_only=True)
    user_photo_url = serializers.CharField(source="user.profile_photo_url", read_only=True)
    user_rating = serializers.SerializerMethodField()

    class Meta:
        model = Participant
        fields = [
            "id",
            "activity_id",
            "user_id",
            "user_name",
            "user_photo_url",
            "user_rating",
            "status",
            "requested_at",
        ]
        read_only_fields = fields

    def get_user_rating(self, obj):
        return ProfileService.get_rating(obj.user)
