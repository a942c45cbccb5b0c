from rest_framework import serializers
from .models import User, UserProfile, SKILL_LEVEL_CHOICES


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'full_name',
            'age',
            'profile_photo_url',
            'date_joined',
        ]
        read_only_fields = ['id', 'username', 'date_joined']


class ProfileSerializer(serializers.ModelSerializer):
    """Read view of a user + profile, with system-maintained fields."""
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    full_name = serializers.CharField(source='user.display_name', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    age = serializers.IntegerField(source='user.age', read_only=True)
    profile_photo_url = serializers.CharField(source='user.profile_photo_url', read_only=True)
    experience_tag = serializers.CharField(read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            'user_id',
            'full_name',
            'email',
            'age',
            'profile_photo_url',
            'bio',
            'location',
            'skill_level',
            'interests',
            'average_rating',
            'total_activities',
            'experience_tag',
        ]
        read_only_fields = fields


class UpdateProfileSerializer(serializers.Serializer):
    bio = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True, max_length=255)
    skill_level = serializers.ChoiceField(choices=SKILL_LEVEL_CHOICES, required=False)
    interests = serializers.CharField(required=False, allow_blank=True)

    # User-level fields
    full_name = serializers.CharField(required=False, max_length=255)
    age = serializers.IntegerField(required=False, min_value=0, max_value=120)
    profile_photo_url = serializers.CharField(required=False, allow_blank=True, max_length=1024)

    USER_FIELDS = ('full_name', 'age', 'profile_photo_url')

    def validate_interests(self, value):
        tokens = [token.strip() for token in value.split(",") if token.strip()]
        return ",".join(tokens)
