"""
Core views: registration, sign-in and the current user's profile.
"""

import logging

from django.contrib.auth import get_user_model

from rest_framework import generics, permissions
from rest_framework_simplejwt.views import TokenObtainPairView

from .serializers import CustomTokenObtainPairSerializer, UserRegistrationSerializer, UserSerializer

User = get_user_model()

logger = logging.getLogger(__name__)


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    Sign in with email and password.

    Returns an access/refresh token pair and the signed-in user.
    """

    serializer_class = CustomTokenObtainPairSerializer


class UserRegistrationView(generics.CreateAPIView):
    """
    API endpoint for user registration.

    Responds with the new user and a token pair so the client is signed in
    straight away.
    """

    queryset = User.objects.all()
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = UserRegistrationSerializer

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info("Registered user %s", user.pk)


class UserProfileView(generics.RetrieveAPIView):
    """
    API endpoint for viewing the current user.
    """

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user
