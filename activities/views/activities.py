from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.authentication import SessionAuthentication, BasicAuthentication
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework import status

from core.exceptions import BadRequest
from users.models import SKILL_LEVEL_CHOICES
from activities import services
from activities.models import Activity
from activities.selectors import get_activity
from activities.serializers import ActivitySerializer, ActivityWriteSerializer
from activities.state_machine import complete_activity, delete_activity
from activities.throttles import ActivityCreateThrottle

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _parse_pagination(query_params):
    try:
        limit = int(query_params.get("limit", DEFAULT_PAGE_SIZE))
        offset = int(query_params.get("offset", 0))
    except ValueError:
        raise BadRequest("Invalid pagination params")

    return max(1, min(limit, MAX_PAGE_SIZE)), max(0, offset)


class CategoryListView(APIView):
    """
    GET /api/activities/categories/
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(services.get_predefined_categories())


class ActivityListCreateView(APIView):
    """
    GET  /api/activities/?category=&skill_level=&location=&status=&ordering=&limit=&offset=
    POST /api/activities/
    """
    authentication_classes = [JWTAuthentication, SessionAuthentication, BasicAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = [ActivityCreateThrottle]

    def get(self, request):
        params = request.query_params

        status_param = params.get("status")
        if status_param and status_param not in dict(Activity.STATUS_CHOICES):
            raise BadRequest(f"Invalid status: {status_param}")

        skill_param = params.get("skill_level")
        if skill_param and skill_param not in dict(SKILL_LEVEL_CHOICES):
            raise BadRequest(f"Invalid skill level: {skill_param}")

        qs = services.filter_activities(
            category=params.get("category"),
            skill_level=skill_param,
            location=params.get("location"),
            status=status_param,
            ordering=params.get("ordering"),
        )

        limit_val, offset_val = _parse_pagination(params)

        # Get total count before pagination for proper pagination response
        total_count = qs.count()
        qs = qs[offset_val : offset_val + limit_val]

        return Response({
            "count": total_count,
            "results": ActivitySerializer(qs, many=True).data,
            "limit": limit_val,
            "offset": offset_val,
        })

    def post(self, request):
        serializer = ActivityWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        activity = services.create_activity(request.user, **serializer.validated_data)
        activity = get_activity(activity.id)
        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)


class ActivityDetailView(APIView):
    """
    GET    /api/activities/<activity_id>/
    PUT    /api/activities/<activity_id>/
    PATCH  /api/activities/<activity_id>/
    DELETE /api/activities/<activity_id>/
    """
    authentication_classes = [JWTAuthentication, SessionAuthentication, BasicAuthentication]
    permission_classes = [IsAuthenticated]

    def get(self, request, activity_id):
        return Response(ActivitySerializer(get_activity(activity_id)).data)

    def patch(self, request, activity_id):
        # Edits only touch the fields that were sent
        serializer = ActivityWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        activity = services.update_activity(activity_id, request.user, **serializer.validated_data)
        return Response(ActivitySerializer(activity).data)

    def put(self, request, activity_id):
        return self.patch(request, activity_id)

    def delete(self, request, activity_id):
        delete_activity(activity_id, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CompleteActivityView(APIView):
    """
    POST /api/activities/<activity_id>/complete/
    """
    authentication_classes = [JWTAuthentication, SessionAuthentication, BasicAuthentication]
    permission_classes = [IsAuthenticated]

    def post(self, request, activity_id):
        complete_activity(activity_id, request.user)
        return Response(ActivitySerializer(get_activity(activity_id)).data)


class MyCreatedActivitiesView(APIView):
    """
    GET /api/activities/me/created/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = services.my_created_activities(request.user)
        return Response(ActivitySerializer(qs, many=True).data)


class MyJoinedActivitiesView(APIView):
    """
    GET /api/activities/me/joined/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = services.my_joined_activities(request.user)
        return Response(ActivitySerializer(qs, many=True).data)
