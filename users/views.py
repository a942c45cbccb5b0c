# users/views.py - User + profile API

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .models import UserProfile
from .serializers import UserSerializer, ProfileSerializer, UpdateProfileSerializer
from .services import ProfileService


def _profile_for_display(user):
    # Users without a stored profile still get the default view (rating 0, "Newbie")
    return ProfileService.get_profile(user) or UserProfile(user=user)


class UserViewSet(viewsets.GenericViewSet):
    """
    Standard User API
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        GET /api/users/me/
        Return current user info
        """
        serializer = self.get_serializer(request.user)
        return Response(serializer.data)


class ProfileViewSet(viewsets.GenericViewSet):
    """
    API for reading and editing profile data used by recommendations.

    GET   /api/users/profile/me/
    PATCH /api/users/profile/me/
    GET   /api/users/profile/<user_id>/
    """
    permission_classes = [IsAuthenticated]
    serializer_class = ProfileSerializer
    lookup_value_regex = r"\d+"

    def retrieve(self, request, pk=None):
        user = ProfileService.get_user(pk)
        return Response(ProfileSerializer(_profile_for_display(user)).data)

    @action(detail=False, methods=['get', 'patch'])
    def me(self, request):
        user = request.user

        if request.method == 'PATCH':
            serializer = UpdateProfileSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            data = dict(serializer.validated_data)

            user_fields = {
                key: data.pop(key)
                for key in UpdateProfileSerializer.USER_FIELDS
                if key in data
            }
            if user_fields:
                for attr, value in user_fields.items():
                    setattr(user, attr, value)
                user.save(update_fields=list(user_fields))

            profile = ProfileService.create_or_update_profile(user, **data)
            return Response(ProfileSerializer(profile).data)

        return Response(ProfileSerializer(_profile_for_display(user)).data)
