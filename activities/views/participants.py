from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.authentication import SessionAuthentication, BasicAuthentication
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework import status

from activities.participation import ParticipationManager
from activities.serializers import ParticipantSerializer
from activities.throttles import ActivityJoinThrottle

NOT_JOINED = "NOT_JOINED"


class JoinActivityView(APIView):
    """
    POST /api/activities/<activity_id>/participants/join/
    """
    authentication_classes = [JWTAuthentication, SessionAuthentication, BasicAuthentication]
    permission_classes = [IsAuthenticated]
    throttle_classes = [ActivityJoinThrottle]

    def post(self, request, activity_id):
        participant = ParticipationManager.request_to_join(activity_id, request.user)
        return Response(ParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)


class ApprovedParticipantsView(APIView):
    """
    GET /api/activities/<activity_id>/participants/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, activity_id):
        qs = ParticipationManager.get_approved_participants(activity_id)
        return Response(ParticipantSerializer(qs, many=True).data)


class PendingRequestsView(APIView):
    """
    GET /api/activities/<activity_id>/participants/pending/
    Creator only.
    """
    authentication_classes = [JWTAuthentication, SessionAuthentication, BasicAuthentication]
    permission_classes = [IsAuthenticated]

    def get(self, request, activity_id):
        qs = ParticipationManager.get_pending_requests(activity_id, request.user)
        return Response(ParticipantSerializer(qs, many=True).data)


class MyParticipationStatusView(APIView):
    """
    GET /api/activities/<activity_id>/participants/my-status/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, activity_id):
        participant = ParticipationManager.get_my_participation(activity_id, request.user)
        if participant is None:
            return Response({"status": NOT_JOINED})
        return Response(ParticipantSerializer(participant).data)


class ParticipantDecisionView(APIView):
    """
    POST /api/activities/<activity_id>/participants/<participant_id>/approve/
    POST /api/activities/<activity_id>/participants/<participant_id>/reject/
    """
    authentication_classes = [JWTAuthentication, SessionAuthentication, BasicAuthentication]
    permission_classes = [IsAuthenticated]

    def post(self, request, activity_id, participant_id, action):
        if action == "approve":
            participant = ParticipationManager.approve(participant_id, request.user, activity_id=activity_id)
        else:
            participant = ParticipationManager.reject(participant_id, request.user, activity_id=activity_id)
        return Response(ParticipantSerializer(participant).data)
