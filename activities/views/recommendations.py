from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from activities.recommendations import get_recommendations
from activities.serializers import ActivitySerializer
from activities.throttles import RecommendationThrottle


class RecommendationsView(APIView):
    """
    GET /api/activities/recommendations/?limit=10
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [RecommendationThrottle]

    def get(self, request):
        activities = get_recommendations(request.user.id, limit=request.query_params.get("limit"))
        return Response(ActivitySerializer(activities, many=True).data)
