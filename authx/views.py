from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .serializers import SignupSerializer


class SignupView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        # Tokens come from the JWT login endpoint
        return Response(
            {"message": "User created successfully", "id": user.id, "username": user.username},
            status=status.HTTP_201_CREATED
        )
